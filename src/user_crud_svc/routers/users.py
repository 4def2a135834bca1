import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Path, status
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel, ConfigDict
from sqlalchemy import delete, insert, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from user_crud_svc.models.base import get_db
from user_crud_svc.models.user import User

router = APIRouter()

USER_NOT_FOUND = "User not found"
PASSWORD_NOT_PROVIDED = "Password not provided"
USER_ALREADY_EXISTS = "User already exists"
INTERNAL_ERROR = "Internal server error"

# userid is a 32-bit INTEGER column
USERID_MIN = -2**31
USERID_MAX = 2**31 - 1


class UserProfile(BaseModel):
    """
    Pydantic model for a user as stored and returned by the service.
    """
    model_config = ConfigDict(from_attributes=True)

    userid: int
    email: str
    password: str


class RegisterRequest(BaseModel):
    """
    Pydantic model for registration. A client-supplied userid is ignored.
    """
    userid: Optional[int] = None
    email: str
    password: str


class UpdatePasswordRequest(BaseModel):
    password: Optional[str] = None


class UpdatePasswordResponse(BaseModel):
    message: str
    user: UserProfile


class MessageResponse(BaseModel):
    message: str


def internal_error() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail=INTERNAL_ERROR
    )


@router.get("/", response_class=PlainTextResponse)
async def hello_greet():
    """
    Liveness check. Does not touch the database.
    """
    return "Hello Bro"


@router.get("/fetch-whole-db", response_model=List[UserProfile])
async def fetch_whole_db(db: AsyncSession = Depends(get_db)):
    """
    Return every user row. No ordering is applied.
    """
    try:
        result = await db.execute(select(User))
        users = result.scalars().all()
        return [UserProfile.model_validate(user) for user in users]
    except Exception as e:
        logging.error(e, exc_info=True)
        raise internal_error()


@router.post("/register", response_model=UserProfile)
async def register_user(request: RegisterRequest, db: AsyncSession = Depends(get_db)):
    """
    Insert a new user and return it with the id assigned by the database.

    Raises HTTPException with status 409 if the schema rejects the row
    (for example a unique email), and 500 for any other database error.
    """
    try:
        stmt = (
            insert(User)
            .values(email=request.email, password=request.password)
            .returning(User.userid, User.email, User.password)
        )
        result = await db.execute(stmt)
        row = result.one()
        await db.commit()
        return UserProfile.model_validate(row)
    except IntegrityError as e:
        logging.warning(f"Registration rejected by the database: {e.orig}")
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=USER_ALREADY_EXISTS)
    except Exception as e:
        logging.error(e, exc_info=True)
        raise internal_error()


@router.put("/update-pw/{id}", response_model=UpdatePasswordResponse)
async def update_user(
    request: UpdatePasswordRequest,
    id: int = Path(..., ge=USERID_MIN, le=USERID_MAX),
    db: AsyncSession = Depends(get_db)
):
    """
    Replace the password of the user with the given id.

    Returns:
      - HTTP 200 with a message and the updated user.
      - HTTP 400 if the body carries no password (absent or null).
      - HTTP 404 if no user has this id.
      - HTTP 500 for database errors.
    """
    if request.password is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=PASSWORD_NOT_PROVIDED)

    try:
        stmt = (
            update(User)
            .where(User.userid == id)
            .values(password=request.password)
            .returning(User.userid, User.email, User.password)
            .execution_options(synchronize_session=False)
        )
        result = await db.execute(stmt)
        row = result.first()
        await db.commit()

        if row is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=USER_NOT_FOUND)

        return UpdatePasswordResponse(
            message="User password updated",
            user=UserProfile.model_validate(row)
        )
    except HTTPException:
        raise
    except Exception as e:
        logging.error(e, exc_info=True)
        raise internal_error()


@router.delete("/delete-user/{id}", response_model=MessageResponse)
async def delete_registered_user(
    id: int = Path(..., ge=USERID_MIN, le=USERID_MAX),
    db: AsyncSession = Depends(get_db)
):
    """
    Delete the user with the given id. The deleted row is not returned.
    """
    try:
        stmt = (
            delete(User)
            .where(User.userid == id)
            .execution_options(synchronize_session=False)
        )
        result = await db.execute(stmt)
        rows_affected = result.rowcount
        await db.commit()

        if rows_affected == 0:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=USER_NOT_FOUND)

        return MessageResponse(message="User got deleted")
    except HTTPException:
        raise
    except Exception as e:
        logging.error(e, exc_info=True)
        raise internal_error()

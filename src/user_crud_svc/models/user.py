from sqlalchemy import Column, Integer, String
from user_crud_svc.models.base import Base


class User(Base):
    """
    SQLAlchemy model for a row of the users table.
    Attributes:
        userid (int): Identifier assigned by the database on insert.
        email (str): User's email address, stored as given.
        password (str): User's password, stored as given (plaintext).
    """
    __tablename__ = "users"

    userid = Column(Integer, primary_key=True)
    email = Column(String, nullable=False)
    password = Column(String, nullable=False)

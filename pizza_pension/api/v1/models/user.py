from sqlalchemy import Column, Integer, Text
from pizza_pension.core.db import Base

from pizza_pension.api.v1.security.passwords import hash_password, verify_password


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(Text, nullable=False, unique=True)
    password = Column(Text, nullable=False)  # argon2 hash, salt embedded

    def verify_password(self, plain_password: str) -> bool:
        """Verify plain password against the stored hashed password."""
        return verify_password(plain_password, self.password)

    def set_password(self, plain_password: str):
        """Hash and set password."""
        self.password = hash_password(plain_password)

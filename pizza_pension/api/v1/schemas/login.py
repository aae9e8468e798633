from pydantic import BaseModel, constr


class LoginRequest(BaseModel):
    username: constr(strip_whitespace=True, min_length=1)
    password: constr(min_length=1)


class UserResponse(BaseModel):
    id: int
    username: str

    class Config:
        from_attributes = True  # Updated for Pydantic V2

from pydantic import BaseModel, EmailStr
from typing import Optional

class Token(BaseModel):
    access_token: str
    token_type: str

class TokenData(BaseModel):
    # The profile email is the token subject
    email: Optional[EmailStr] = None

class GoogleLoginRequest(BaseModel):
    token: str # Google ID token received from the client

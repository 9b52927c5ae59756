from pydantic import BaseModel, ConfigDict
from typing import Optional

class UserResponse(BaseModel):
    id: int
    user_name: str
    email: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)

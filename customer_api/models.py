# models.py
from pydantic import BaseModel
from sqlmodel import SQLModel, Field
from typing import Optional

# --- CUSTOMER ---
class Customer(BaseModel):
    id: Optional[int] = None
    name: str
    age: int

class CustomerSQL(SQLModel, table=True):
    __tablename__ = "customers"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(index=True, unique=True)
    age: int

# --- REQUEST BODIES ---
class NameCheck(BaseModel):
    name: str

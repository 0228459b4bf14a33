"""Customer CRUD service: FastAPI handler, business rules and SQLModel storage."""

# main.py
import logging

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from customer_api import routes
from customer_api.config import settings, configure_logging
from customer_api.database import engine, create_db_and_tables, seed_customers
from customer_api.repository import SQLModelCustomerRepository

configure_logging()
log = logging.getLogger(__name__)

app = FastAPI(title="Customer API")

# Include the router from routes.py
app.include_router(routes.router)

@app.exception_handler(RequestValidationError)
async def invalid_request_handler(request: Request, exc: RequestValidationError):
    log.info(f"Malformed request to {request.url.path}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": "invalid request", "errors": jsonable_encoder(exc.errors())},
    )

@app.on_event("startup")
def on_startup():
    create_db_and_tables(engine)
    if settings.seed_data:
        seed_customers(SQLModelCustomerRepository(engine))
    log.info("Customer API ready.")

@app.get("/")
def read_root():
    return {"message": "Customer API is running"}

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

import config
from db import init_db
from errors import register_error_handlers
from logger import configure_logging, request_id_middleware
from routes import assumptions, bills, catalog, forecast, health, income, summary, transactions

configure_logging()

app = FastAPI(title=config.API_NAME)


@app.on_event("startup")
def startup():
    init_db()


app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.middleware("http")(request_id_middleware)

register_error_handlers(app)

for module in (health, assumptions, bills, catalog, income, transactions, forecast, summary):
    app.include_router(module.router, prefix="/api")

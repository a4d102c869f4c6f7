from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.config import settings
from app.database import engine, Base, get_db
from app.exceptions import register_exception_handlers
from app.auth.router import router as auth_router
from app.vendor.router import router as vendor_router
from app.products.router import router as product_router
from app.reviews.router import router as review_router
from app.admin.router import router as admin_router

import os
import uvicorn
from datetime import datetime
from contextlib import asynccontextmanager
from loguru import logger


logger.add(settings.LOG_FILE, rotation=settings.LOG_ROTATION, level=settings.LOG_LEVEL)

# Ensure upload folder exists
os.makedirs(settings.UPLOAD_DIR, exist_ok=True)


# Database startup
@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Application startup")
    Base.metadata.create_all(bind=engine)
    yield
    logger.info("Application shutdown")


# Create app
app = FastAPI(
    title="VENDOR MANAGEMENT PORTAL",
    description="An API for vendor registration, product catalogs, client reviews and vendor ratings.",
    version="1.0.0",
    lifespan=lifespan
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

app.mount("/uploads", StaticFiles(directory=settings.UPLOAD_DIR), name="uploads")


# Routers
app.include_router(auth_router, prefix="/api/auth", tags=["Auth"])
app.include_router(vendor_router, prefix="/api/vendors", tags=["Vendors"])
app.include_router(product_router, prefix="/api/products", tags=["Products"])
app.include_router(review_router, prefix="/api/reviews", tags=["Reviews"])
app.include_router(admin_router, prefix="/api/admin", tags=["Admin"])


@app.get("/health")
def health_check():
    return {
        "status": "OK",
        "timestamp": datetime.utcnow().isoformat(),
        "database": "check /api/db-test",
    }


@app.get("/api/db-test")
def db_test(db: Session = Depends(get_db)):
    try:
        now = db.execute(text("SELECT CURRENT_TIMESTAMP")).scalar()
    except SQLAlchemyError as e:
        logger.error(f"Database connection failed: {e}")
        return JSONResponse(
            status_code=500,
            content={"success": False, "message": "Database connection failed"},
        )
    return {"success": True, "message": "Database connected", "time": str(now)}


if __name__ == "__main__":
    uvicorn.run("app.main:app", host=settings.SERVER_HOST, port=settings.SERVER_PORT)

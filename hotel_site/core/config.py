import os
from dotenv import load_dotenv

load_dotenv()

# -------- DATABASE --------
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./hotel_site.db")

# -------- AUTH --------
JWT_SECRET = os.getenv("JWT_SECRET", "dev-secret-change-in-production")
JWT_ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", 60))

# Emails that get the admin role on sign-up
ADMIN_EMAILS = {
    email.strip().lower()
    for email in os.getenv("ADMIN_EMAILS", "").split(",")
    if email.strip()
}

# -------- REALTIME --------
REDIS_URL = os.getenv("REDIS_URL")

# -------- STORAGE --------
CLOUDINARY_CLOUD_NAME = os.getenv("CLOUDINARY_CLOUD_NAME")
CLOUDINARY_API_KEY = os.getenv("CLOUDINARY_API_KEY")
CLOUDINARY_API_SECRET = os.getenv("CLOUDINARY_API_SECRET")

MAX_UPLOAD_BYTES = int(float(os.getenv("MAX_UPLOAD_MB", 5)) * 1024 * 1024)
MAX_AVATAR_BYTES = int(float(os.getenv("MAX_AVATAR_MB", 2)) * 1024 * 1024)
MAX_GALLERY_IMAGES = int(os.getenv("MAX_GALLERY_IMAGES", 10))

# -------- NETWORK --------
BACKEND_TIMEOUT_SECONDS = float(os.getenv("BACKEND_TIMEOUT_SECONDS", 10))

# -------- HTTP --------
CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]

# -------- LOGGING --------
LOG_DIR = os.getenv("LOG_DIR", "logs")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

"""
Configuration settings for TutorHub Backend
"""

from pydantic_settings import BaseSettings
from typing import List


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""

    # Server Configuration
    APP_NAME: str = "TutorHub Backend"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = True
    HOST: str = "0.0.0.0"
    PORT: int = 8001
    LOG_LEVEL: str = "INFO"

    # Firebase Configuration
    FIREBASE_CREDENTIALS_PATH: str = "./firebase-credentials.json"
    # Support for raw JSON credentials (env var)
    FIREBASE_CREDENTIALS_JSON: str = ""
    FIREBASE_PROJECT_ID: str = ""
    FIREBASE_EMULATOR_HOST: str = ""
    DEV_MODE: bool = False

    # Firestore collections
    TEACHER_COLLECTION: str = "teacherRequests"
    STUDENT_COLLECTION: str = "studentRequests"
    USER_COLLECTION: str = "users"

    # Cloudinary (unsigned preset uploads)
    CLOUDINARY_CLOUD_NAME: str = ""
    CLOUDINARY_UPLOAD_PRESET: str = ""
    CLOUDINARY_FOLDER: str = "student_photos"
    CLOUDINARY_UPLOAD_URL: str = "https://api.cloudinary.com/v1_1/{cloud_name}/upload"
    CLOUDINARY_TIMEOUT_SECONDS: float = 30.0
    MAX_PHOTO_BYTES: int = 5 * 1024 * 1024

    # CORS Configuration - Expo dev server and local web builds
    ALLOWED_ORIGINS: str = "http://localhost:8081,http://localhost:19006"

    @property
    def allowed_origins_list(self) -> List[str]:
        """Convert comma-separated origins to list"""
        origins = [origin.strip()
                   for origin in self.ALLOWED_ORIGINS.split(",") if origin.strip()]
        if self.DEBUG:
            for port in (8081, 19006, 3000):
                for host in ("localhost", "127.0.0.1"):
                    origin = f"http://{host}:{port}"
                    if origin not in origins:
                        origins.append(origin)
        return origins

    model_config = {"env_file": ".env",
                    "case_sensitive": True, "extra": "allow"}


# Global settings instance
settings = Settings()

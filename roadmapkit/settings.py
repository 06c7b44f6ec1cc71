"""
RoadmapKit Django 설정.

환경변수는 `EnvSettings`(pydantic-settings)로 검증한 뒤 Django 설정으로 옮긴다.
템플릿은 DB 대신 Django 캐시(기본 로컬 메모리, REDIS_URL 지정 시 Redis)에 저장한다.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import List, Optional

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

BASE_DIR = Path(__file__).resolve().parent.parent


class EnvSettings(BaseSettings):
    """서버가 읽는 환경변수 목록 (.env 파일도 지원)."""

    DJANGO_SECRET_KEY: SecretStr = SecretStr("roadmapkit-dev-only-secret")
    DJANGO_DEBUG: bool = False
    DJANGO_ALLOWED_HOSTS: List[str] = Field(default=["localhost", "127.0.0.1", "testserver"])

    GEMINI_API_KEY: Optional[SecretStr] = None
    AI_DEFAULT_MODEL: str = "gemini-2.5-flash"
    AI_TIMEOUT: int = 30
    AI_MAX_RETRIES: int = 3

    # URL 가져오기 시 페이지 본문 수집
    IMPORT_FETCH_TIMEOUT: int = 10
    IMPORT_CONTEXT_MAX_CHARS: int = 15000

    REDIS_URL: Optional[str] = None
    CORS_ALLOWED_ORIGINS: List[str] = Field(default=["http://localhost:3000"])
    SECURE_SSL_REDIRECT: bool = False
    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=BASE_DIR / ".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=True,
    )


try:
    env = EnvSettings()
except Exception as e:
    print(f"[CRITICAL] RoadmapKit 환경변수 검증 실패: {e}")
    sys.exit(1)


SECRET_KEY = env.DJANGO_SECRET_KEY.get_secret_value()
DEBUG = env.DJANGO_DEBUG
ALLOWED_HOSTS = env.DJANGO_ALLOWED_HOSTS

# auth/contenttypes는 DRF의 AnonymousUser 때문에 필요
INSTALLED_APPS = [
    "django.contrib.auth",
    "django.contrib.contenttypes",
    "django.contrib.staticfiles",
    "rest_framework",
    "drf_spectacular",
    "corsheaders",
    "roadmapkit.roadmap_core",
]

MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "whitenoise.middleware.WhiteNoiseMiddleware",
    "corsheaders.middleware.CorsMiddleware",
    "django.middleware.common.CommonMiddleware",
]

ROOT_URLCONF = "roadmapkit.urls"
WSGI_APPLICATION = "roadmapkit.wsgi.application"

# Swagger/Redoc 화면 렌더링용
TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "APP_DIRS": True,
        "OPTIONS": {"context_processors": ["django.template.context_processors.request"]},
    }
]

DATABASES = {
    "default": {"ENGINE": "django.db.backends.sqlite3", "NAME": BASE_DIR / "db.sqlite3"},
}

USE_TZ = True

STATIC_URL = "static/"
STATIC_ROOT = BASE_DIR / "staticfiles"
STORAGES = {
    "default": {"BACKEND": "django.core.files.storage.FileSystemStorage"},
    "staticfiles": {"BACKEND": "whitenoise.storage.CompressedManifestStaticFilesStorage"},
}

CORS_ALLOW_ALL_ORIGINS = DEBUG
CORS_ALLOWED_ORIGINS = env.CORS_ALLOWED_ORIGINS

REST_FRAMEWORK = {
    "DEFAULT_SCHEMA_CLASS": "drf_spectacular.openapi.AutoSchema",
    "DEFAULT_AUTHENTICATION_CLASSES": [],
    "DEFAULT_PERMISSION_CLASSES": [],
    "DEFAULT_PARSER_CLASSES": ["rest_framework.parsers.JSONParser"],
    "DEFAULT_RENDERER_CLASSES": ["rest_framework.renderers.JSONRenderer"]
    + (["rest_framework.renderers.BrowsableAPIRenderer"] if DEBUG else []),
    "DEFAULT_THROTTLE_CLASSES": ["rest_framework.throttling.AnonRateThrottle"],
    "DEFAULT_THROTTLE_RATES": {"anon": "100/hour"},
    "UNICODE_JSON": True,
}

SPECTACULAR_SETTINGS = {
    "TITLE": "RoadmapKit API",
    "DESCRIPTION": "로드맵 레이아웃, 가져오기, 템플릿/쇼케이스 API",
    "VERSION": "1.0.0",
    "SERVE_INCLUDE_SCHEMA": False,
    "COMPONENT_SPLIT_REQUEST": True,
}

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "simple": {"format": "[{asctime}] {levelname} {name} - {message}", "style": "{"},
        "json": {
            "()": "pythonjsonlogger.json.JsonFormatter",
            "format": "%(asctime)s %(levelname)s %(name)s %(message)s",
        },
    },
    "handlers": {
        "console": {"class": "logging.StreamHandler", "formatter": "simple", "stream": sys.stdout},
        "file": {
            "class": "logging.handlers.RotatingFileHandler",
            "filename": BASE_DIR / "logs" / "roadmapkit.log",
            "maxBytes": 5 * 1024 * 1024,
            "backupCount": 3,
            "formatter": "json",
        },
    },
    "loggers": {
        "django": {"handlers": ["console"], "level": "INFO", "propagate": False},
        "roadmapkit.roadmap_core": {"handlers": ["console", "file"], "level": env.LOG_LEVEL, "propagate": False},
    },
}
(BASE_DIR / "logs").mkdir(exist_ok=True)

# 템플릿 저장소. 항목별 만료는 DjangoCacheStorage가 끈다.
CACHES = {
    "default": {
        "BACKEND": "django.core.cache.backends.locmem.LocMemCache",
        "LOCATION": "roadmapkit-templates",
    }
}
if env.REDIS_URL:
    CACHES["default"] = {
        "BACKEND": "django.core.cache.backends.redis.RedisCache",
        "LOCATION": env.REDIS_URL,
    }

GEMINI_API_KEY = env.GEMINI_API_KEY.get_secret_value() if env.GEMINI_API_KEY else ""
AI_DEFAULT_MODEL = env.AI_DEFAULT_MODEL
AI_TIMEOUT = env.AI_TIMEOUT
AI_MAX_RETRIES = env.AI_MAX_RETRIES
IMPORT_FETCH_TIMEOUT = env.IMPORT_FETCH_TIMEOUT
IMPORT_CONTEXT_MAX_CHARS = env.IMPORT_CONTEXT_MAX_CHARS

if not DEBUG:
    SECURE_SSL_REDIRECT = env.SECURE_SSL_REDIRECT
    SECURE_HSTS_SECONDS = 31536000
    SECURE_CONTENT_TYPE_NOSNIFF = True
    SECURE_PROXY_SSL_HEADER = ("HTTP_X_FORWARDED_PROTO", "https")

import os

# APP_ENV -> settings module; aliases share one module.
ENVIRONMENTS = {
    "prod": "config.production",
    "production": "config.production",
    "test": "config.testing",
    "testing": "config.testing",
    "dev": "config.development",
    "development": "config.development",
}


def get_settings_module() -> str:
    # Lấy giá trị môi trường từ biến APP_ENV, mặc định là 'development'
    env = os.getenv("APP_ENV", "development").strip().lower()

    # Giá trị lạ vẫn chạy với cấu hình Development
    return ENVIRONMENTS.get(env, "config.development")

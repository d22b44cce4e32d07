# _*_ coding: utf-8 _*_
"""Simple Pydantic Settings implementation."""
from pydantic import Field
from pydantic_settings import BaseSettings
from typing import List


class Settings(BaseSettings):
    """통합 설정 클래스 - Pydantic Settings 방식"""

    # Application Configuration
    app_version: str = Field(default="1.0.0", env="APP_VERSION")
    app_log_level: str = Field(default="info", env="APP_LOG_LEVEL")
    app_debug: bool = Field(default=False, env="APP_DEBUG")
    # 리버스 프록시 뒤에서 실행 시 사용 (예: "/galaxy")
    app_root_path: str = Field(default="", env="APP_ROOT_PATH")

    # Server Configuration
    server_host: str = Field(default="0.0.0.0", env="SERVER_HOST")
    server_port: int = Field(default=8000, env="SERVER_PORT")
    server_reload: bool = Field(default=False, env="SERVER_RELOAD")
    server_log_level: str = Field(default="info", env="SERVER_LOG_LEVEL")

    # CORS Configuration
    cors_origins: str = Field(default="http://localhost:4200,http://localhost:8000", env="CORS_ORIGINS")

    # Logging Configuration
    # ==========================================
    # 로그 파일 저장 여부
    # - True: 로그를 파일에 저장 (온프레미스)
    # - False: stdout으로만 출력 (컨테이너 환경)
    log_to_file: bool = Field(default=False, env="LOG_TO_FILE")
    log_dir: str = Field(default="./logs", env="LOG_DIR")
    log_file: str = Field(default="galaxy.log", env="LOG_FILE")

    # 로그 로테이션 방식: daily | weekly | monthly | size
    log_rotation: str = Field(default="daily", env="LOG_ROTATION")
    log_retention_days: int = Field(default=30, env="LOG_RETENTION_DAYS")

    # 에러 로그에 스택 트레이스 포함 여부
    log_include_exc_info: bool = Field(default=True, env="LOG_INCLUDE_EXC_INFO")

    # Service Log Configuration (DB 서비스 로그)
    service_log_enabled: bool = Field(default=True, env="SERVICE_LOG_ENABLED")
    service_log_system_name: str = Field(default="GalaxyAPI", env="SERVICE_LOG_SYSTEM_NAME")
    service_log_system_token: str = Field(default="", env="SERVICE_LOG_SYSTEM_TOKEN")

    # Database Configuration
    # DATABASE_URL이 지정되면 그대로 사용 (SQLAlchemy async URL)
    database_url: str = Field(default="", env="DATABASE_URL")
    database_host: str = Field(default="localhost", env="DATABASE_HOST")
    database_port: int = Field(default=5432, env="DATABASE_PORT")
    database_name: str = Field(default="galaxy_db", env="DATABASE_NAME")
    database_username: str = Field(default="postgres", env="DATABASE_USERNAME")
    database_password: str = Field(default="password", env="DATABASE_PASSWORD")
    database_echo: bool = Field(default=False, env="DATABASE_ECHO")
    database_create_tables: bool = Field(default=False, env="DATABASE_CREATE_TABLES")

    # JWT Configuration
    jwt_enabled: bool = Field(default=True, env="JWT_ENABLED")
    jwt_secret_key: str = Field(default="change_me", env="JWT_SECRET_KEY")
    jwt_algorithm: str = Field(default="HS512", env="JWT_ALGORITHM")
    jwt_issuer: str = Field(default="galaxy-api", env="JWT_ISSUER")
    jwt_access_token_expires_minutes: int = Field(default=60, env="JWT_ACCESS_TOKEN_EXPIRES_MINUTES")
    jwt_exclude_paths: str = Field(
        default="/health,/docs,/redoc,/openapi.json,/v1/login,/v1/renew,/v1/log/create,/alertstream",
        env="JWT_EXCLUDE_PATHS",
    )

    # SSO Configuration (로그인 시 전달되는 상위 인증 토큰)
    # - False: 서명 검증 없이 payload만 추출 (사내망, 개발)
    # - True: JWKS 엔드포인트의 공개키로 RS256 서명 검증
    sso_verify_signature: bool = Field(default=False, env="SSO_VERIFY_SIGNATURE")
    sso_jwks_uri: str = Field(default="", env="SSO_JWKS_URI")
    sso_audience: str = Field(default="", env="SSO_AUDIENCE")

    # Directory Configuration (Microsoft Graph / Azure AD)
    directory_base_url: str = Field(default="https://graph.microsoft.com/v1.0", env="DIRECTORY_BASE_URL")
    directory_token_url: str = Field(
        default="https://login.microsoftonline.com/{tenant_id}/oauth2/v2.0/token",
        env="DIRECTORY_TOKEN_URL",
    )
    directory_tenant_id: str = Field(default="", env="DIRECTORY_TENANT_ID")
    directory_client_id: str = Field(default="", env="DIRECTORY_CLIENT_ID")
    directory_client_secret: str = Field(default="", env="DIRECTORY_CLIENT_SECRET")
    directory_timeout: float = Field(default=20.0, env="DIRECTORY_TIMEOUT")
    directory_group_search_limit: int = Field(default=20, env="DIRECTORY_GROUP_SEARCH_LIMIT")

    # CoMIT Domain Configuration
    permission_system_name: str = Field(default="comit", env="PERMISSION_SYSTEM_NAME")
    component_tag_type_name: str = Field(default="Component", env="COMPONENT_TAG_TYPE_NAME")
    alertstream_greeting: str = Field(default="Connected to GalaxyAPI alert stream.", env="ALERTSTREAM_GREETING")

    def get_cors_origins(self) -> List[str]:
        """CORS origins를 리스트로 반환"""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    def get_jwt_exclude_paths(self) -> List[str]:
        """JWT 검증 제외 경로 리스트 반환"""
        return [path.strip() for path in self.jwt_exclude_paths.split(",") if path.strip()]

    class Config:
        env_file = ".env"  # 로컬 개발용 (파일이 없어도 에러 없음)
        env_file_encoding = "utf-8"
        case_sensitive = False
        extra = "ignore"

    def get_database_url(self) -> str:
        """데이터베이스 URL 생성 (async 드라이버)"""
        if self.database_url:
            return self.database_url
        if self.database_host == "sqlite":
            return f"sqlite+aiosqlite:///{self.database_name}.db"
        return (
            f"postgresql+asyncpg://{self.database_username}:{self.database_password}"
            f"@{self.database_host}:{self.database_port}/{self.database_name}"
        )

    def get_directory_token_url(self) -> str:
        return self.directory_token_url.format(tenant_id=self.directory_tenant_id)

    # Uvicorn config
    def get_uvicorn_config(self) -> dict:
        """uvicorn 설정 반환"""
        return {
            "host": self.server_host,
            "port": self.server_port,
            "reload": self.server_reload,
            "log_level": self.server_log_level
        }


# 전역 설정 인스턴스
settings = Settings()

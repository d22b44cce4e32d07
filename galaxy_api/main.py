# -*- coding: utf-8 -*-
"""GalaxyAPI application entry point."""
import glob
import logging
import logging.config
import os
from contextlib import asynccontextmanager
from datetime import datetime, timedelta

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from galaxy_api.config import settings
from galaxy_api.core.dependencies import close_database, get_database
from galaxy_api.core.global_exception_handlers import set_global_exception_handlers
from galaxy_api.middleware.auth_middleware import JWTAuthMiddleware


def cleanup_old_logs():
    """
    보관 기간(LOG_RETENTION_DAYS)이 지난 로테이션 로그 파일 삭제

    - 대상: `galaxy.log.2025-09-15`처럼 날짜 접미사가 붙은 파일
    - 현재 로그 파일과 날짜 형식이 아닌 파일(`galaxy.log.1` 등)은 건너뛴다
    - 실패해도 애플리케이션 시작을 막지 않는다
    """
    if not settings.log_to_file:
        logger.debug("파일 로깅이 비활성화되어 로그 정리를 건너뜁니다")
        return

    try:
        log_pattern = os.path.join(settings.log_dir, "{log_file}.*".format(log_file=settings.log_file))
        cutoff_date = datetime.now() - timedelta(days=settings.log_retention_days)

        deleted_count = 0
        for log_file_path in glob.glob(log_pattern):
            filename = os.path.basename(log_file_path)
            if filename == settings.log_file:
                continue

            try:
                file_date = datetime.strptime(filename.split('.')[-1], '%Y-%m-%d')
            except ValueError:
                logger.debug("날짜 형식이 맞지 않아 건너뛰기: {}".format(filename))
                continue

            if file_date < cutoff_date:
                try:
                    os.remove(log_file_path)
                    deleted_count += 1
                except OSError as e:
                    logger.warning("로그 파일 삭제 중 오류: {}, 오류: {}".format(log_file_path, e))

        if deleted_count > 0:
            logger.info("오래된 로그 파일 {}개 삭제 완료 (보관 기간: {}일)".format(deleted_count, settings.log_retention_days))
    except Exception as e:
        logger.error("로그 정리 중 오류 발생: {}".format(e))


def setup_logging():
    """환경변수 기반 로깅 설정 (콘솔은 항상, 파일은 LOG_TO_FILE일 때만)"""
    app_log_level = getattr(logging, settings.app_log_level.upper(), logging.INFO)
    server_log_level = getattr(logging, settings.server_log_level.upper(), logging.INFO)

    log_to_file = settings.log_to_file
    log_path = os.path.join(settings.log_dir, settings.log_file)
    if log_to_file:
        os.makedirs(settings.log_dir, exist_ok=True)

    handlers = {
        "console": {
            "class": "logging.StreamHandler",
            "level": app_log_level,
            "formatter": "colored",
            "stream": "ext://sys.stdout"
        }
    }

    if log_to_file:
        if settings.log_rotation == "size":
            handlers["file"] = {
                "class": "logging.handlers.RotatingFileHandler",
                "level": app_log_level,
                "formatter": "default",
                "filename": log_path,
                "maxBytes": 10485760,  # 10MB
                "backupCount": 5,
                "encoding": "utf-8"
            }
        else:
            when_map = {
                "daily": "midnight",
                "weekly": "W0",  # 매주 월요일
                "monthly": "M1"
            }
            handlers["file"] = {
                "class": "logging.handlers.TimedRotatingFileHandler",
                "level": app_log_level,
                "formatter": "default",
                "filename": log_path,
                "when": when_map.get(settings.log_rotation, "midnight"),
                "interval": 1,
                "backupCount": settings.log_retention_days,
                "encoding": "utf-8"
            }

    handler_names = ["console"] + (["file"] if log_to_file else [])
    logging_config = {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "default": {
                "format": "[%(asctime)s.%(msecs)03d] %(levelname)s [%(thread)d] %(name)s - %(message)s",
            },
            "colored": {
                "()": "coloredlogs.ColoredFormatter",
                "format": "%(asctime)s.%(msecs)03d %(levelname)-5s %(process)5d --- [%(funcName)20s] %(name)-40s : %(message)s"
            }
        },
        "handlers": handlers,
        "loggers": {
            "": {
                "level": app_log_level,
                "handlers": handler_names
            },
            "uvicorn": {
                "level": server_log_level,
                "handlers": handler_names,
                "propagate": False
            },
            "uvicorn.access": {
                "level": server_log_level,
                "handlers": handler_names,
                "propagate": False
            }
        }
    }

    logging.config.dictConfig(logging_config)
    logging.getLogger(__name__).info(
        "로깅 설정 완료 - 앱 로그 레벨: {}, 서버 로그 레벨: {}".format(
            settings.app_log_level.upper(), settings.server_log_level.upper()
        )
    )


setup_logging()
logger = logging.getLogger(__name__)

cleanup_old_logs()


@asynccontextmanager
async def lifespan(app: FastAPI):
    if settings.database_create_tables:
        await get_database().create_database()
    yield
    await close_database()
    logger.info("GalaxyAPI 종료")


def create_app():
    logger.info("Creating FastAPI application...")

    debug_mode = settings.app_debug
    app = FastAPI(
        title="GalaxyAPI",
        description="CoMIT monitoring/administration backend",
        version=settings.app_version,
        debug=debug_mode,
        root_path=settings.app_root_path,  # 리버스 프록시 환경에서 사용
        lifespan=lifespan,
    )

    app = set_global_exception_handlers(app)

    # APP_ROOT_PATH로 관리하므로 라우터에서는 /v1만 사용
    api_prefix = "/v1"

    from galaxy_api.api.routers.auth_router import router as auth_router
    app.include_router(auth_router, prefix=api_prefix)

    from galaxy_api.api.routers.security_router import router as security_router
    app.include_router(security_router, prefix=api_prefix)

    from galaxy_api.api.routers.component_router import router as component_router
    app.include_router(component_router, prefix=api_prefix)

    from galaxy_api.api.routers.tag_router import router as tag_router
    app.include_router(tag_router, prefix=api_prefix)

    from galaxy_api.api.routers.category_router import router as category_router
    app.include_router(category_router, prefix=api_prefix)

    from galaxy_api.api.routers.message_query_router import router as message_query_router
    app.include_router(message_query_router, prefix=api_prefix)

    from galaxy_api.api.routers.log_router import router as log_router
    app.include_router(log_router, prefix=api_prefix)

    # 웹소켓은 버전 경로 없이 노출
    from galaxy_api.api.routers.alertstream_router import router as alertstream_router
    app.include_router(alertstream_router)

    # 미들웨어는 나중에 추가한 것이 바깥쪽에서 실행된다 (CORS -> JWT)
    app.add_middleware(JWTAuthMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.get_cors_origins(),
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE"],
        allow_headers=["*"],
    )

    @app.get("/health")
    async def health_check():
        return {"status": "healthy", "service": "galaxy-api", "version": settings.app_version}

    logger.info("FastAPI application created successfully")
    return app


app = create_app()


def run():
    import uvicorn

    uvicorn.run("galaxy_api.main:app", **settings.get_uvicorn_config())

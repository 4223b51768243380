import uvicorn

from streamcore.config import get_settings


def main():
    settings = get_settings()
    uvicorn.run(
        "streamcore.app:create_app",
        factory=True,
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
        # Open streams get this long to finish before the server exits
        timeout_graceful_shutdown=settings.shutdown_grace_s,
    )


if __name__ == "__main__":
    main()

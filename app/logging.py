import logging, sys
from app.settings import Settings, settings as default_settings

PIPELINE_LOGGER = "analysis_pipeline"


def configure_logging(settings: Settings | None = None):
    settings = settings or default_settings
    logging.basicConfig(
        level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)]
    )
    for noisy_logger in ("httpx", "httpcore", "pdfminer"):
        logging.getLogger(noisy_logger).setLevel(logging.WARNING)

    if settings.PIPELINE_LOG_FILE:
        pipeline_logger = logging.getLogger(PIPELINE_LOGGER)
        already = any(
            isinstance(h, logging.FileHandler)
            and h.baseFilename.endswith(settings.PIPELINE_LOG_FILE)
            for h in pipeline_logger.handlers
        )
        if not already:
            fh = logging.FileHandler(
                settings.PIPELINE_LOG_FILE, mode="a", encoding="utf-8")
            fh.setLevel(logging.INFO)
            fh.setFormatter(logging.Formatter(
                "%(asctime)s [%(levelname)s] %(message)s"))
            pipeline_logger.addHandler(fh)

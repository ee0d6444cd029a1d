import os

import uvicorn

from agroutils.logging_utils import get_tagged_logger, setup_logging

logger = get_tagged_logger(__name__, tag="server")


if __name__ == "__main__":
    setup_logging(level=os.getenv("AGRO_LOG_LEVEL", "INFO"), service_name="agroweather")
    if not os.getenv("AGRO_OPENWEATHER_API_KEY"):
        logger.warning("AGRO_OPENWEATHER_API_KEY is not set; weather endpoints will answer 503")

    uvicorn.run(
        "agroweather.main:app",
        host="0.0.0.0",
        port=int(os.getenv("PORT", 8000)),
        reload=False,
    )

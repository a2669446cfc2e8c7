"""Launch the pressure profile FastAPI server."""

import logging

import uvicorn

from pressure_profile import config


def main():
    logging.basicConfig(level=config.LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    uvicorn.run("pressure_profile.server:app", host=config.HOST, port=config.PORT, reload=True)


if __name__ == "__main__":
    main()

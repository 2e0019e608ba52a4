"""Запуск сервера: python -m docmanual"""

import uvicorn

from docmanual.core.config import settings


def main() -> None:
    uvicorn.run("docmanual.main:app", host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()

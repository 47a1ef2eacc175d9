# bugsync/__main__.py
import uvicorn

from bugsync.core.config import settings


def main():
    uvicorn.run("bugsync.main:app", host="0.0.0.0", port=settings.PORT)


if __name__ == "__main__":
    main()

import uvicorn

from autosub.settings import settings

if __name__ == "__main__":
    uvicorn.run("autosub.main:app", host=settings.host, port=settings.port)

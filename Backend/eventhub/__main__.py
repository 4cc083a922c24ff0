import uvicorn

from eventhub.config import get_settings


def main():
    uvicorn.run("eventhub.main:app", host="0.0.0.0", port=get_settings().PORT)


if __name__ == "__main__":
    main()

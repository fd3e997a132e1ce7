"""ASGI entry point.

    uvicorn guestdesk.main:app --port 3000
    guestdesk                      # console script, honours HOST / PORT
"""

import uvicorn

from guestdesk.api.factory import create_app

app = create_app()


def run() -> None:
    settings = app.state.settings
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()

import atexit
import os

from .app import create_app

app = create_app()
services = app.extensions["plantnet"]
services.store.ping()
atexit.register(services.close)


if __name__ == "__main__":
    port = int(os.environ.get("PORT", 9000))
    app.logger.info("plantNet is running on port %s", port)
    app.run(host="0.0.0.0", port=port)

import os

from aerobook import create_app
from aerobook.config import DevConfig, ProdConfig


config = ProdConfig if os.getenv("APP_ENV") == "production" else DevConfig
app = create_app(config)

if __name__ == "__main__":
    app.run()

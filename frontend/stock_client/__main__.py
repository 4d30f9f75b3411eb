# frontend/stock_client/__main__.py
import logging

from stock_client.console import run

logging.basicConfig(level=logging.WARNING, format="%(levelname)s %(name)s: %(message)s")
run()

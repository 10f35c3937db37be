"""
bottleup_node/app.py
--------------------
Thin entrypoint for running the BottleUp FastAPI app via:

    uvicorn bottleup_node.app:app

All real route wiring lives in bottleup_node.bottleup_api.
"""

from .bottleup_api import app as app  # re-export for uvicorn

"""
MTOR Evolution - Server Entry Point

Module-level ``app`` for ``uvicorn mtor.main:app``. Importing this module
builds the service container from the environment settings (and seeds the
demo data when MTOR_SEED_DEMO_DATA is on); tests use mtor.app.create_app
with their own settings instead.
"""
from mtor.app import create_app

app = create_app()


# ---- Run with uvicorn ----
if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000)

"""
ASGI entrypoint: expose `app` for process managers / deployments.

- En production, un process manager (ex: gunicorn/uvicorn-workers) importe `licenseshop.asgi:app`.
- Toute la configuration FastAPI est centralisée dans licenseshop.app_setup.factory.
"""

from licenseshop.app import app

if __name__ == "__main__":
    import os
    import uvicorn
    uvicorn.run(
        "licenseshop.asgi:app",
        host="0.0.0.0",
        port=int(os.getenv("PORT", "3000")),
        reload=True,
    )

import os

import uvicorn

if __name__ == "__main__":
    host = os.environ.get("CHRONOSTACK_HOST", "127.0.0.1")
    port = int(os.environ.get("CHRONOSTACK_PORT", "8000"))

    print("Starting ChronoStack Layout API...")
    print(f"Docs available at: http://{host}:{port}/docs")

    uvicorn.run(
        "chronostack.api.server:app",
        host=host,
        port=port,
        reload=True
    )

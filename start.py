"""Container entrypoint: reads PORT and starts uvicorn."""
import os
import sys

port = int(os.environ.get("PORT", 8000))
print(f"Starting htmlguard on port {port}", flush=True)
print(f"Python: {sys.version}", flush=True)

import uvicorn
uvicorn.run(
    "htmlguard.web.app:create_app",
    host="0.0.0.0",
    port=port,
    factory=True,
    log_level=os.environ.get("HTMLGUARD_LOG_LEVEL", "info").lower(),
)

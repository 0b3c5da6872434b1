"""Demo server for versioned redirects.

Runs the standalone service: package paths are redirected to their
versioned documentation URL, unresolvable requests are proxied to the
fallback origin.

Run with: python demo_app.py
Then try:
    curl -i http://localhost:8000/asar/latest
    curl -i "http://localhost:8000/asar/latest?tab=api"
    curl -i http://localhost:8000/not/a/package/path

Configuration comes from VERSION_REDIRECT_* environment variables, e.g.
VERSION_REDIRECT_FALLBACK_ORIGIN=https://origin.example.com.
"""

import uvicorn

from version_redirect.app import create_app
from version_redirect.config import RedirectConfig
from version_redirect.observability.logging import configure_logging_from_config

config = RedirectConfig.from_env()
configure_logging_from_config(config)

app = create_app(config)


if __name__ == "__main__":
    print("=" * 60)
    print("Version Redirect Demo Server")
    print("=" * 60)
    print("\nStarting server at http://localhost:8000")
    print(f"Redirecting to:  {config.service_origin}")
    print(f"Registry:        {config.registry_url_template}")
    print(f"Fallback origin: {config.fallback_origin}")
    print("\nTry these commands:")
    print("  curl -i http://localhost:8000/asar/latest")
    print("  curl -i http://localhost:8000/not/a/package/path")
    print("\nPress Ctrl+C to stop")
    print("=" * 60)
    print()

    uvicorn.run(app, host="0.0.0.0", port=8000, log_level=config.log_level.lower())

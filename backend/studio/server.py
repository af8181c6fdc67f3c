"""Command-line entry point that serves the API with uvicorn."""

import os

import uvicorn


def main() -> None:
    """Run the app; HOST/PORT/RELOAD come from the environment."""
    uvicorn.run(
        "studio.controller.main_controller:app",
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "5000")),
        reload=os.getenv("RELOAD", "false").lower() == "true",
    )


if __name__ == "__main__":
    main()

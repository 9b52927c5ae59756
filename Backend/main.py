from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from app.api import tracks, artists, albums, playlists, users
import traceback
import logging
import uvicorn # For running programmatically
import os



# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("app")
logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)

app = FastAPI(title="Cadence API")

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # In production, replace with specific origins
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Store failures and anything else unexpected end up here as a 500
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    error_detail = traceback.format_exc()
    logger.error(f"Unhandled exception: {str(exc)}\n{error_detail}")
    return JSONResponse(
        status_code=500,
        content={
            "error": str(exc),
            "path": request.url.path
        }
    )

# Include routes
app.include_router(tracks.router, prefix="/api", tags=["tracks"])
app.include_router(artists.router, prefix="/api", tags=["artists"])
app.include_router(albums.router, prefix="/api", tags=["albums"])
app.include_router(playlists.router, prefix="/api", tags=["playlists"])
app.include_router(users.router, prefix="/api", tags=["users"])


@app.get("/")
async def root():
    return {"message": "Welcome to Cadence API"}


if __name__ == "__main__":
    # For deployment, bind to 0.0.0.0 and take PORT from the environment
    port = int(os.environ.get("PORT", 8000))
    uvicorn.run("main:app", host="0.0.0.0", port=port, log_level="info")

# backend/admin_stats/main.py
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import logging

from admin_stats.api.admin_statistics import router as admin_statistics_router
from admin_stats.api.team_statistics import router as team_statistics_router
from admin_stats.core.config import CORS_ALLOW_ORIGINS, LOG_LEVEL

logging.basicConfig(level=LOG_LEVEL)

app = FastAPI(title="Admin Statistics API", version="0.1.0")

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ALLOW_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Health check
@app.get("/api/health")
def health():
    return {"status": "ok"}

# Routers
for router in (admin_statistics_router, team_statistics_router):
    app.include_router(router)
    logging.info("Mounted router: %s", router.prefix)

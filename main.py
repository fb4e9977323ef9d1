from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from datetime import datetime
import os
import logging
from dotenv import load_dotenv

from db import init_db
from admissions.ai.llm_client import OpenAIChatClient
from admissions.logic import ProgramCatalog, build_chat_orchestrator
from admissions.routes import router as admissions_router
from admissions.store import SqlChatStore

load_dotenv()

logging.basicConfig(level=logging.INFO)
logging.info("App starting with DATABASE_URL")

CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]

app = FastAPI(title="KNUST Admissions Chatbot API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

init_db()

# Catalog and orchestrator are built once and shared by every request
catalog = ProgramCatalog.from_defaults()
store = SqlChatStore()

app.state.catalog = catalog
app.state.store = store
app.state.chat_orchestrator = build_chat_orchestrator(OpenAIChatClient(), store=store, catalog=catalog)

logging.info(f"Loaded {len(catalog)} KNUST programs across {len(catalog.colleges)} colleges")

app.include_router(admissions_router)


@app.get("/health", tags=["meta"], summary="Health check")
def health():
    return {"status": "ok", "timestamp": datetime.utcnow().isoformat()}

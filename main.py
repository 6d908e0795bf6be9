from __future__ import annotations

from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.templating import Jinja2Templates

from resume_builder.init_db import ensure_schema
from resume_builder.logger import setup_logger
from resume_builder.render import TemplateId
from resume_builder.routers import editor, resumes, summary

templates = Jinja2Templates(directory=str(Path(__file__).parent / "resume_builder" / "templates"))

app = FastAPI(title="Resume Builder")

# Dev CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.on_event("startup")
def _startup():
    setup_logger()
    ensure_schema()


# Routers
app.include_router(editor.router)
app.include_router(summary.router)
app.include_router(resumes.router)


@app.get("/")
def editor_page(request: Request):
    return templates.TemplateResponse(
        request,
        "editor.html",
        {"templates": [t.value for t in TemplateId]},
    )


@app.get("/healthz")
def healthz():
    return {"ok": True}


@app.get("/readyz")
def readyz():
    # Basic readiness: DB connection works
    try:
        from resume_builder.db import SessionLocal
        db = SessionLocal()
        from sqlalchemy import text
        db.execute(text("SELECT 1"))
        db.close()
        return {"ok": True}
    except Exception as e:
        return {"ok": False, "error": str(e)}

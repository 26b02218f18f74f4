"""HTTP surface: JSON API over the app controller plus the AI summary proxy.

Validation no-ops answer {"ok": false} rather than an error status, and
/api/evaluate answers 200 whatever it is sent.
"""

import asyncio
import logging

from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel, ValidationError

from sprout import config
from sprout.controller import AppController
from sprout.models import Period
from sprout.storage import SQLiteStore
from sprout.summary import (
    FALLBACK_MESSAGE, EvaluateRequest, EvaluateResponse, evaluate_habits,
)

log = logging.getLogger(__name__)

# ======================
# MODELS
# ======================

class AddHabitReq(BaseModel):
    name: str
    importance: int = 5

class LogTimeReq(BaseModel):
    minutes: int

class GratitudeReq(BaseModel):
    entry: str

# ======================
# APP
# ======================

def create_app(controller: AppController | None = None) -> FastAPI:
    app = FastAPI(title="Sprout")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    ctl = controller or AppController(SQLiteStore(config.DB_PATH))
    app.state.controller = ctl

    # ---------- AI summary ----------

    @app.post("/api/evaluate", response_model=EvaluateResponse)
    async def evaluate(request: Request):
        # Parsed by hand so a bad body still gets a 200 and a message.
        try:
            req = EvaluateRequest.model_validate(await request.json())
        except (ValueError, ValidationError) as e:
            log.warning("Rejected evaluate payload: %s", e)
            return EvaluateResponse(evaluation=FALLBACK_MESSAGE)
        text = await asyncio.to_thread(evaluate_habits, req.habits)
        return EvaluateResponse(evaluation=text)

    @app.post("/api/evaluation")
    async def evaluation():
        return {"evaluation": await ctl.request_evaluation()}

    # ---------- habits ----------

    @app.get("/api/habits")
    async def list_habits():
        return [
            {**h.to_dict(), "today_minutes": ctl.habits.today_minutes(h)}
            for h in ctl.habits.habits
        ]

    @app.post("/api/habits")
    async def add_habit(req: AddHabitReq):
        habit = ctl.add_habit(req.name, req.importance)
        if habit is None:
            return {"ok": False}
        return {"ok": True, "habit": habit.to_dict()}

    @app.post("/api/habits/{habit_id}/log")
    async def log_time(habit_id: str, req: LogTimeReq):
        if req.minutes < 0:
            return {"ok": False}
        entry = ctl.log_time(habit_id, req.minutes)
        if entry is None:
            return {"ok": False}
        return {"ok": True, "date": entry.date, "minutes": entry.minutes}

    @app.delete("/api/habits/{habit_id}")
    async def delete_habit(habit_id: str):
        return {"ok": ctl.delete_habit(habit_id)}

    @app.get("/api/stats/{period}")
    async def stats(period: str):
        try:
            period = Period(period)
        except ValueError:
            raise HTTPException(status_code=404, detail=f"Unknown period: {period}")
        return [s.to_dict() for s in ctl.stats(period)]

    # ---------- gratitude ----------

    @app.get("/api/prompt")
    async def prompt():
        return {"prompt": ctl.refresh_prompt(), "pending": ctl.journal.pending}

    @app.get("/api/gratitude")
    async def list_gratitude(limit: int = 20):
        return [e.to_dict() for e in ctl.journal.list_recent(limit)]

    @app.post("/api/gratitude")
    async def submit_gratitude(req: GratitudeReq):
        entry = ctl.submit_gratitude(req.entry)
        if entry is None:
            return {"ok": False}
        return {"ok": True, "entry": entry.to_dict()}

    @app.post("/api/gratitude/skip")
    async def skip_gratitude():
        ctl.skip_gratitude()
        return {"ok": True}

    # ---------- premium / views ----------

    @app.post("/api/premium")
    async def toggle_premium():
        return {"premium": ctl.toggle_premium()}

    @app.get("/view/{view}", response_class=PlainTextResponse)
    async def render(view: str):
        try:
            ctl.switch_view(view)
        except ValueError:
            raise HTTPException(status_code=404, detail=f"Unknown view: {view}")
        return ctl.render()

    @app.get("/", response_class=PlainTextResponse)
    async def index():
        return ctl.render()

    return app

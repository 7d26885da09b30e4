"""FastAPI application with all routes."""
from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone

logging.basicConfig(level=logging.INFO, format="%(name)s | %(message)s")

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import Response

from mcq_forge.bilingual import render_question
from mcq_forge.config import Settings, load_settings, save_settings
from mcq_forge.db import Database
from mcq_forge.ingest import ingest_documents
from mcq_forge.models import LANGUAGES, MODES, Attempt, Quiz
from mcq_forge.providers.base import GenerationError
from mcq_forge.providers.factory import get_llm
from mcq_forge.quiz_generator import build_context, generate_quiz, mock_quiz, question_count
from mcq_forge.scoring import score_quiz
from mcq_forge.segmenter import segment

app = FastAPI(title="MCQ Forge")

_log = logging.getLogger("mcq_forge.app")


@dataclass
class QuizState:
    """What the user is working on: ingested chunks and the loaded quiz.

    The quiz is only ever replaced wholesale.  ``generation_lock`` keeps a
    second generation from racing the first for the visible quiz.
    """
    chunks: list[str] = field(default_factory=list)
    quiz: Quiz | None = None
    generation_lock: asyncio.Lock = field(default_factory=asyncio.Lock)

    def replace_quiz(self, quiz: Quiz) -> None:
        self.quiz = quiz

    def clear(self) -> None:
        self.chunks = []
        self.quiz = None


# Global state (initialized in startup)
_db: Database | None = None
_settings: Settings | None = None
_state = QuizState()


def get_db() -> Database:
    assert _db is not None
    return _db


def get_settings() -> Settings:
    assert _settings is not None
    return _settings


def get_state() -> QuizState:
    return _state


def _get_llm():
    return get_llm(get_settings())


@app.on_event("startup")
async def startup():
    global _db, _settings
    if _db is not None:
        return  # Already initialized (e.g. by tests)
    _settings = load_settings()
    _db = Database(_settings.db_full_path)


@app.on_event("shutdown")
async def shutdown():
    if _db:
        _db.close()


async def _body(request: Request) -> dict:
    return await request.json() if await request.body() else {}


def _quiz_view(quiz: Quiz, language: str | None = None) -> dict:
    lang = language or quiz.meta.language
    return {
        "meta": quiz.meta.to_dict(),
        "language": lang,
        "questions": [
            {"index": i, **render_question(q, lang)}
            for i, q in enumerate(quiz.questions)
        ],
    }


def _store_summary(state: QuizState) -> dict:
    return {
        "chunk_count": len(state.chunks),
        "question_count": len(state.quiz) if state.quiz else 0,
        "preview": [c[:220] for c in state.chunks[:6]],
    }


# ── Generation ────────────────────────────────────────────────────────────

async def _run_generation(body: dict, use_ingested: bool) -> dict:
    """Generate a quiz from the current chunks or topic and load it.

    The previous quiz stays loaded when generation or parsing fails.
    """
    s = get_settings()
    state = get_state()
    if state.generation_lock.locked():
        raise HTTPException(409, "A quiz is already being generated")

    mode = body.get("mode", "generate")
    if mode not in MODES:
        raise HTTPException(400, f"Unknown mode: {mode}")
    topic = body.get("topic") or "General"
    language = body.get("language") or s.language
    difficulty = body.get("difficulty") or s.difficulty
    n = question_count(mode, int(body.get("num_questions") or s.num_questions))

    async with state.generation_lock:
        context = build_context(state.chunks, topic, mode, n, use_ingested)
        if not context.strip():
            raise HTTPException(400, "Nothing to generate from. Ingest text or give a topic.")
        try:
            outcome = await generate_quiz(
                _get_llm(), context,
                num_questions=n, language=language, mode=mode,
                topic=topic, difficulty=difficulty, temperature=s.temperature,
            )
        except GenerationError as e:
            _log.warning("Generation failed: %s", e)
            raise HTTPException(502, {"status": "error", "message": str(e), "payload": e.payload})
        except ValueError as e:
            raise HTTPException(400, str(e))

        if not outcome.ok:
            return {"status": outcome.extracted.error, **outcome.extracted.to_dict(), "response": outcome.raw}
        state.replace_quiz(outcome.quiz)
        return {"status": "ready", "raw": outcome.raw, "quiz": _quiz_view(outcome.quiz)}


# ── API: Ingest ───────────────────────────────────────────────────────────

@app.post("/api/ingest")
async def api_ingest(request: Request):
    body = await _body(request)
    text = (body.get("text") or "").strip()
    if not text:
        raise HTTPException(400, "No text provided")
    state = get_state()
    chunks = segment(text, get_settings().chunk_size)
    state.chunks.extend(chunks)
    result = {"added_chunks": len(chunks), **_store_summary(state)}
    if body.get("auto_generate") and state.chunks:
        result["generation"] = await _run_generation(body, use_ingested=True)
    return result


@app.post("/api/ingest/file")
async def api_ingest_file(request: Request, filename: str):
    data = await request.body()
    if not data:
        raise HTTPException(400, "Empty upload")
    s = get_settings()
    state = get_state()
    chunks, errors = await ingest_documents([(filename, data)], s.chunk_size, s.ocr_languages)
    if errors:
        raise HTTPException(422, errors[0])
    state.chunks.extend(chunks)
    return {"added_chunks": len(chunks), **_store_summary(state)}


@app.post("/api/ingest/clear")
async def api_ingest_clear():
    state = get_state()
    state.clear()
    return _store_summary(state)


@app.get("/api/chunks")
async def api_chunks():
    state = get_state()
    return {"chunks": state.chunks, **_store_summary(state)}


# ── API: Generate ─────────────────────────────────────────────────────────

@app.post("/api/generate")
async def api_generate(request: Request):
    body = await _body(request)
    return await _run_generation(body, use_ingested=bool(body.get("use_ingested", False)))


@app.post("/api/generate/mock")
async def api_generate_mock(request: Request):
    body = await _body(request)
    s = get_settings()
    quiz = mock_quiz(
        int(body.get("num_questions") or s.num_questions),
        body.get("language") or s.language,
        body.get("mode", "generate"),
    )
    get_state().replace_quiz(quiz)
    return {"status": "ready", "quiz": _quiz_view(quiz)}


# ── API: Current quiz ─────────────────────────────────────────────────────

def _current_quiz() -> Quiz:
    quiz = get_state().quiz
    if quiz is None:
        raise HTTPException(404, "No quiz loaded")
    return quiz


@app.get("/api/quiz")
async def api_quiz(language: str | None = None):
    quiz = _current_quiz()
    if language is not None and language not in LANGUAGES:
        raise HTTPException(400, f"Unknown language: {language}")
    return _quiz_view(quiz, language)


@app.post("/api/quiz/submit")
async def api_quiz_submit(request: Request):
    body = await request.json()
    quiz = _current_quiz()
    s = get_settings()
    answers = body.get("answers", [])
    if not isinstance(answers, list):
        raise HTTPException(400, "answers must be a list")
    if any(a is not None and (isinstance(a, bool) or not isinstance(a, int)) for a in answers):
        raise HTTPException(400, "answers must be option indexes or null")
    language = body.get("language") or quiz.meta.language
    negative_mark = body.get("negative_mark", s.negative_mark)
    neg_value = body.get("neg_value", s.neg_value)

    result = score_quiz(quiz, answers, negative_mark=negative_mark, neg_value=neg_value)

    attempt = Attempt(
        timestamp=datetime.now(timezone.utc).isoformat(),
        topic=quiz.meta.topic,
        score=result.score,
        total=result.total,
        num_questions=len(quiz),
        language=quiz.meta.language,
        difficulty=quiz.meta.difficulty,
        mode=quiz.meta.mode,
        quiz_id=quiz.meta.id,
    )
    get_db().append_attempt(attempt)

    return {
        "score": result.score,
        "total": result.total,
        "results": [
            {
                "index": r.index,
                "correct": r.correct,
                "chosen": r.chosen,
                "correct_index": quiz.questions[r.index].correct_index,
                "explanation": render_question(quiz.questions[r.index], language)["explanation"],
            }
            for r in result.per_question
        ],
        "attempt": attempt.to_dict(),
    }


# ── API: Saved quizzes ────────────────────────────────────────────────────

@app.post("/api/quizzes")
async def api_save_quiz():
    quiz = _current_quiz()
    quiz_id = get_db().save_quiz(quiz)
    quiz.meta.id = quiz_id
    return {"id": quiz_id}


@app.get("/api/quizzes")
async def api_list_quizzes():
    return {"quizzes": get_db().list_saved_quizzes()}


@app.post("/api/quizzes/{quiz_id}/load")
async def api_load_quiz(quiz_id: str):
    quiz = get_db().get_saved_quiz(quiz_id)
    if quiz is None:
        raise HTTPException(404, "Quiz not found")
    get_state().replace_quiz(quiz)
    return _quiz_view(quiz)


@app.delete("/api/quizzes/{quiz_id}")
async def api_delete_quiz(quiz_id: str):
    if not get_db().delete_saved_quiz(quiz_id):
        raise HTTPException(404, "Quiz not found")
    return {"ok": True}


# ── API: History & stats ──────────────────────────────────────────────────

@app.get("/api/history")
async def api_history():
    history = get_db().get_history()
    return {"attempts": [a.to_dict() for a in reversed(history)]}


@app.delete("/api/history")
async def api_clear_history():
    return {"deleted": get_db().clear_history()}


@app.get("/api/history/export")
async def api_export_history():
    csv_text = get_db().export_history_csv()
    if csv_text is None:
        raise HTTPException(404, "No history")
    stamp = int(datetime.now(timezone.utc).timestamp() * 1000)
    return Response(
        csv_text,
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="attempts_{stamp}.csv"'},
    )


@app.get("/api/stats")
async def api_stats():
    return get_db().get_stats()


# ── API: Settings ─────────────────────────────────────────────────────────

@app.get("/api/settings")
async def api_get_settings():
    return get_settings().public_dict()


@app.put("/api/settings")
async def api_update_settings(request: Request):
    body = await request.json()
    s = get_settings()
    known = {f.name for f in Settings.__dataclass_fields__.values()}
    for k, v in body.items():
        if k == "gemini_key" and isinstance(v, str) and v.startswith("***"):
            continue  # masked value echoed back
        if k in known:
            setattr(s, k, v)
    save_settings(s)
    return s.public_dict()

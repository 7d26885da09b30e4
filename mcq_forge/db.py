from __future__ import annotations

import csv
import io
import json
import sqlite3
import time
from datetime import datetime, timezone
from pathlib import Path

from mcq_forge.models import Attempt, Quiz
from mcq_forge.normalizer import quiz_from_dict

SCHEMA = """
CREATE TABLE IF NOT EXISTS attempts (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    timestamp TEXT NOT NULL,
    topic TEXT,
    score REAL NOT NULL,
    total INTEGER NOT NULL,
    num_questions INTEGER NOT NULL,
    language TEXT,
    difficulty TEXT,
    mode TEXT,
    quiz_id TEXT
);

CREATE TABLE IF NOT EXISTS saved_quizzes (
    id TEXT PRIMARY KEY,
    topic TEXT,
    num_questions INTEGER NOT NULL,
    saved_at TEXT NOT NULL,
    payload_json TEXT NOT NULL
);
"""

HISTORY_CSV_COLUMNS = [
    "timestamp", "topic", "score", "total", "num_questions",
    "language", "difficulty", "mode",
]

# Score-percentage buckets: 0-20, 20-40, 40-60, 60-80, 80-100
BUCKET_LABELS = ["0-20", "20-40", "40-60", "60-80", "80-100"]


def _bucket(percent: float) -> int:
    if percent >= 80:
        return 4
    if percent >= 60:
        return 3
    if percent >= 40:
        return 2
    if percent >= 20:
        return 1
    return 0


class Database:
    def __init__(self, db_path: Path):
        self.db_path = db_path
        self.conn = sqlite3.connect(str(db_path), check_same_thread=False)
        self.conn.row_factory = sqlite3.Row
        self.conn.execute("PRAGMA journal_mode=WAL")
        self._init_schema()

    def _init_schema(self) -> None:
        self.conn.executescript(SCHEMA)
        self.conn.commit()

    def close(self) -> None:
        self.conn.close()

    # ── Attempts (history) ────────────────────────────────────────────────

    def append_attempt(self, attempt: Attempt) -> Attempt:
        self.conn.execute(
            "INSERT INTO attempts (timestamp, topic, score, total, num_questions, "
            "language, difficulty, mode, quiz_id) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)",
            (
                attempt.timestamp,
                attempt.topic,
                attempt.score,
                attempt.total,
                attempt.num_questions,
                attempt.language,
                attempt.difficulty,
                attempt.mode,
                attempt.quiz_id,
            ),
        )
        self.conn.commit()
        return attempt

    def get_history(self) -> list[Attempt]:
        """All attempts, oldest first."""
        rows = self.conn.execute(
            "SELECT timestamp, topic, score, total, num_questions, language, "
            "difficulty, mode, quiz_id FROM attempts ORDER BY id ASC"
        ).fetchall()
        return [Attempt(**dict(r)) for r in rows]

    def get_attempt_count(self) -> int:
        row = self.conn.execute("SELECT COUNT(*) FROM attempts").fetchone()
        return row[0]

    def clear_history(self) -> int:
        cur = self.conn.execute("DELETE FROM attempts")
        self.conn.commit()
        return cur.rowcount

    def export_history_csv(self) -> str | None:
        """History as CSV text, or None when there is nothing to export."""
        history = self.get_history()
        if not history:
            return None
        buf = io.StringIO()
        writer = csv.writer(buf, lineterminator="\n")
        writer.writerow(HISTORY_CSV_COLUMNS)
        for a in history:
            writer.writerow([getattr(a, col) if getattr(a, col) is not None else "" for col in HISTORY_CSV_COLUMNS])
        return buf.getvalue()

    # ── Saved quizzes ─────────────────────────────────────────────────────

    def save_quiz(self, quiz: Quiz) -> str:
        """Store *quiz* under a fresh ``quiz-<ms>`` id and return the id."""
        quiz_id = f"quiz-{int(time.time() * 1000)}"
        while self.conn.execute(
            "SELECT 1 FROM saved_quizzes WHERE id = ?", (quiz_id,)
        ).fetchone():
            quiz_id = f"quiz-{int(quiz_id.split('-')[1]) + 1}"
        saved_at = datetime.now(timezone.utc).isoformat()
        payload = quiz.to_dict()
        payload["id"] = quiz_id
        payload["meta"]["id"] = quiz_id
        payload["meta"]["saved_at"] = saved_at
        self.conn.execute(
            "INSERT INTO saved_quizzes (id, topic, num_questions, saved_at, payload_json) "
            "VALUES (?, ?, ?, ?, ?)",
            (quiz_id, quiz.meta.topic, len(quiz), saved_at, json.dumps(payload, ensure_ascii=False)),
        )
        self.conn.commit()
        return quiz_id

    def get_saved_quiz(self, quiz_id: str) -> Quiz | None:
        row = self.conn.execute(
            "SELECT payload_json FROM saved_quizzes WHERE id = ?", (quiz_id,)
        ).fetchone()
        if row is None:
            return None
        quiz = quiz_from_dict(json.loads(row["payload_json"]))
        quiz.meta.id = quiz_id
        return quiz

    def list_saved_quizzes(self) -> list[dict]:
        rows = self.conn.execute(
            "SELECT id, topic, num_questions, saved_at FROM saved_quizzes ORDER BY saved_at ASC"
        ).fetchall()
        return [dict(r) for r in rows]

    def get_saved_quiz_count(self) -> int:
        row = self.conn.execute("SELECT COUNT(*) FROM saved_quizzes").fetchone()
        return row[0]

    def delete_saved_quiz(self, quiz_id: str) -> bool:
        cur = self.conn.execute("DELETE FROM saved_quizzes WHERE id = ?", (quiz_id,))
        self.conn.commit()
        return cur.rowcount > 0

    # ── Stats ─────────────────────────────────────────────────────────────

    def get_stats(self) -> dict:
        history = self.get_history()
        percents = [a.score / a.total * 100 for a in history if a.total]
        buckets = [0] * len(BUCKET_LABELS)
        for p in percents:
            buckets[_bucket(p)] += 1
        return {
            "total_attempts": len(history),
            "average_percent": round(sum(percents) / len(percents), 1) if percents else 0,
            "best_percent": round(max(percents), 1) if percents else 0,
            "score_percents": [round(p) for p in percents],
            "distribution": dict(zip(BUCKET_LABELS, buckets)),
            "saved_quizzes": self.get_saved_quiz_count(),
        }

"""CLI entry point for mcq-forge.

Usage:
  python -m mcq_forge serve [--port PORT] [--host HOST]
  python -m mcq_forge stop
  python -m mcq_forge restart [--port PORT]
  python -m mcq_forge status
  python -m mcq_forge generate (--file PATH | --topic TOPIC) [--count N] [--lang mr|en] [--mode generate|extract] [--save | --json]
  python -m mcq_forge history
  python -m mcq_forge stats
"""
from __future__ import annotations

import asyncio
import json
import os
import signal
import sys
from pathlib import Path

# {"pid": ..., "url": ...} of the running server
SERVER_FILE = Path(__file__).resolve().parent.parent / ".server.json"


def main():
    args = sys.argv[1:]
    command = args[0] if args else "serve"

    if command == "serve":
        _serve(args[1:])
    elif command == "stop":
        _stop()
    elif command == "restart":
        _restart(args[1:])
    elif command == "status":
        _status()
    elif command == "generate":
        _generate(args[1:])
    elif command == "history":
        _history()
    elif command == "stats":
        _stats()
    else:
        print(f"Unknown command: {command}")
        print("Commands: serve, stop, restart, status, generate, history, stats")
        sys.exit(1)


def _parse_flag(args: list[str], name: str, default: str) -> str:
    for i, a in enumerate(args):
        if a == name and i + 1 < len(args):
            return args[i + 1]
    return default


def _read_server() -> dict | None:
    """Return ``{"pid", "url"}`` of the running server, or None.

    A PID file whose process is gone is removed.
    """
    if not SERVER_FILE.exists():
        return None
    try:
        info = json.loads(SERVER_FILE.read_text())
        os.kill(int(info["pid"]), 0)
    except (ValueError, KeyError, TypeError, ProcessLookupError, PermissionError):
        SERVER_FILE.unlink(missing_ok=True)
        return None
    return info


def _stop() -> bool:
    info = _read_server()
    if info is None:
        print("No server running.")
        return False
    try:
        os.kill(int(info["pid"]), signal.SIGTERM)
    except ProcessLookupError:
        print("Server already exited.")
        return False
    finally:
        SERVER_FILE.unlink(missing_ok=True)
    print(f"Stopped server at {info.get('url', '?')} (PID {info['pid']}).")
    return True


def _status():
    info = _read_server()
    if info is None:
        print("No server running.")
    else:
        print(f"Serving {info.get('url', '?')} (PID {info['pid']}).")


def _restart(args: list[str]):
    import time
    if _stop():
        time.sleep(1)
    _serve(args)


def _serve(args: list[str]):
    import uvicorn

    running = _read_server()
    if running is not None:
        print(f"Already serving {running.get('url', '?')} (PID {running['pid']}); stop it first.")
        sys.exit(1)

    port = int(_parse_flag(args, "--port", "8766"))
    host = _parse_flag(args, "--host", "127.0.0.1")
    url = f"http://{host}:{port}"
    SERVER_FILE.write_text(json.dumps({"pid": os.getpid(), "url": url}))

    print(f"MCQ Forge listening on {url} (Ctrl+C to stop)\n")
    try:
        uvicorn.run("mcq_forge.app:app", host=host, port=port, timeout_graceful_shutdown=5)
    finally:
        SERVER_FILE.unlink(missing_ok=True)


def _generate(args: list[str]):
    from mcq_forge.bilingual import option_text, resolve
    from mcq_forge.config import load_settings
    from mcq_forge.ingest import ingest_documents
    from mcq_forge.providers.base import GenerationError
    from mcq_forge.providers.factory import get_llm
    from mcq_forge.quiz_generator import build_context, generate_quiz, question_count

    settings = load_settings()
    file_arg = _parse_flag(args, "--file", "")
    topic = _parse_flag(args, "--topic", "General")
    language = _parse_flag(args, "--lang", settings.language)
    mode = _parse_flag(args, "--mode", "generate")
    count = question_count(mode, int(_parse_flag(args, "--count", str(settings.num_questions))))

    chunks: list[str] = []
    if file_arg:
        path = Path(file_arg)
        if not path.exists():
            print(f"File not found: {path}")
            sys.exit(1)
        chunks, errors = asyncio.run(
            ingest_documents([(path.name, path.read_bytes())], settings.chunk_size, settings.ocr_languages)
        )
        for err in errors:
            print(f"  Error: {err}")
        print(f"Ingested {len(chunks)} chunks from {path.name}")

    context = build_context(chunks, topic, mode, count, use_ingested=bool(chunks))
    llm = get_llm(settings)
    print(f"Generating {count} questions ({mode}, {language}) using {llm.name()}...")
    try:
        outcome = asyncio.run(generate_quiz(
            llm, context, num_questions=count, language=language, mode=mode,
            topic=topic, difficulty=settings.difficulty, temperature=settings.temperature,
        ))
    except GenerationError as e:
        print(f"Error: {e}")
        sys.exit(1)

    if not outcome.ok:
        print(f"Parse error ({outcome.extracted.error}): {outcome.extracted.detail or ''}")
        print(outcome.raw)
        sys.exit(1)

    quiz = outcome.quiz
    for i, q in enumerate(quiz.questions, 1):
        print(f"\nQ{i}. {resolve(q.text, language)}")
        for j, opt in enumerate(q.options):
            marker = "*" if j == q.correct_index else " "
            print(f"  {marker} {'ABCD'[j]}) {option_text(opt, language)}")
        explanation = resolve(q.explanation, language)
        if explanation:
            print(f"    {explanation}")

    if "--save" in args:
        from mcq_forge.db import Database
        db = Database(settings.db_full_path)
        quiz_id = db.save_quiz(quiz)
        db.close()
        print(f"\nSaved as {quiz_id}")
    elif "--json" in args:
        print(json.dumps(quiz.to_dict(), indent=2, ensure_ascii=False))


def _history():
    from mcq_forge.config import load_settings
    from mcq_forge.db import Database

    settings = load_settings()
    db = Database(settings.db_full_path)
    history = db.get_history()
    if not history:
        print("No attempts yet.")
    for a in reversed(history):
        print(f"{a.timestamp[:19]}  {a.score:>6}/{a.total:<3} {a.topic} ({a.language}, {a.mode})")
    db.close()


def _stats():
    from mcq_forge.config import load_settings
    from mcq_forge.db import Database

    settings = load_settings()
    db = Database(settings.db_full_path)
    stats = db.get_stats()

    print("MCQ Forge Stats")
    print("=" * 40)
    print(f"Attempts:        {stats['total_attempts']}")
    print(f"Average score:   {stats['average_percent']}%")
    print(f"Best score:      {stats['best_percent']}%")
    print(f"Saved quizzes:   {stats['saved_quizzes']}")
    print("Distribution:")
    for label, n in stats["distribution"].items():
        print(f"  {label:>7}%  {n}")
    db.close()


if __name__ == "__main__":
    main()

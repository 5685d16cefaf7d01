#!/usr/bin/env python3
"""
Scoped Blog API — Management Tool

Single entry point for running and maintaining the API locally.
Usage: python manage.py <command> [options]
"""

import json
import logging
import os
import subprocess
import sys
import urllib.error
import urllib.request
from datetime import datetime
from typing import List, Optional

BACKEND_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), "backend")


# ═══════════════════════════════════════════════════════════
#  Logging Setup
# ═══════════════════════════════════════════════════════════

class ColorFormatter(logging.Formatter):
    """Console formatter with ANSI colors and level symbols."""

    COLORS = {
        "INFO": "\033[96m",        # Cyan
        "SUCCESS": "\033[92m",     # Green
        "WARNING": "\033[93m",     # Yellow
        "ERROR": "\033[91m",       # Red
        "CRITICAL": "\033[91m\033[1m",  # Bold Red
        "DEBUG": "\033[94m",       # Blue
        "HEADER": "\033[95m",      # Magenta
        "BOLD": "\033[1m",
        "RESET": "\033[0m",
    }

    SYMBOLS = {
        "INFO": "→",
        "SUCCESS": "✓",
        "WARNING": "⚠",
        "ERROR": "✗",
        "CRITICAL": "☠",
        "DEBUG": "•",
        "STEP": "▶",
    }

    MARKERS = ("SUCCESS", "WARNING", "ERROR", "STEP")

    def __init__(self, use_colors: bool = True):
        super().__init__()
        self.use_colors = use_colors and sys.platform != "win32"

    def _colorize(self, text: str, color_name: str) -> str:
        if not self.use_colors:
            return text
        color = self.COLORS.get(color_name, "")
        return f"{color}{text}{self.COLORS['RESET']}" if color else text

    def format(self, record: logging.LogRecord) -> str:
        msg = str(record.msg)

        symbol, color = self.SYMBOLS.get(record.levelname, ""), record.levelname
        for marker in self.MARKERS:
            if f"[{marker}]" in msg:
                symbol = self.SYMBOLS[marker]
                color = "INFO" if marker == "STEP" else marker
                break

        if symbol and not msg.startswith(("===", " ")):
            record.msg = f"{symbol} {msg}"

        if msg.startswith("==="):
            record.msg = self._colorize(str(record.msg), "HEADER")
        else:
            record.msg = self._colorize(str(record.msg), color)

        return super().format(record)


# --- Bootstrap logger --------------------------------------------------------
_log_dir = "logs"
os.makedirs(_log_dir, exist_ok=True)
_log_file = os.path.join(_log_dir, f"manage-{datetime.now():%Y%m%d}.log")

_file_handler = logging.FileHandler(_log_file, encoding="utf-8")
_file_handler.setFormatter(logging.Formatter("%(asctime)s [%(levelname)s] %(message)s"))

_console_handler = logging.StreamHandler()
_console_handler.setFormatter(ColorFormatter())

logging.basicConfig(level=logging.INFO, handlers=[_file_handler, _console_handler])
logger = logging.getLogger("manage")


# ═══════════════════════════════════════════════════════════
#  Project Manager
# ═══════════════════════════════════════════════════════════

class ProjectManager:
    """Runs the API, its migrations and its seed data from the backend/ directory."""

    def __init__(self, host: str = "localhost", port: Optional[int] = None):
        self.host = host
        self.port = port or int(os.getenv("APP_PORT", "3000"))
        self.base_url = f"http://{self.host}:{self.port}"

    # ─── Helpers ──────────────────────────────────────────
    def _run(self, cmd: List[str], check: bool = True) -> subprocess.CompletedProcess:
        logger.info(f"[STEP] Running: {' '.join(cmd)}")
        try:
            result = subprocess.run(
                cmd, check=check, text=True, capture_output=True, cwd=BACKEND_DIR
            )
            for line in result.stdout.strip().splitlines():
                if line.strip():
                    logger.info(f"  {line.strip()}")
            for line in result.stderr.strip().splitlines():
                if line.strip():
                    logger.warning(f"  {line.strip()}")
            return result
        except subprocess.CalledProcessError as exc:
            logger.error(f"Command failed (exit {exc.returncode})")
            if exc.stderr:
                logger.error(f"  {exc.stderr.strip()}")
            raise

    def _request(self, path: str, user_id: Optional[int] = None) -> tuple:
        """GET a path and return (status, decoded JSON body)."""
        req = urllib.request.Request(f"{self.base_url}{path}")
        if user_id is not None:
            req.add_header("X-USER-ID", str(user_id))
        try:
            with urllib.request.urlopen(req, timeout=10) as resp:
                return resp.status, json.loads(resp.read().decode())
        except urllib.error.HTTPError as exc:
            return exc.code, json.loads(exc.read().decode() or "null")

    # ─── Server ───────────────────────────────────────────
    def serve(self) -> None:
        """Run the API in the foreground (Ctrl-C to stop)."""
        logger.info("\n=== Starting API Server ===")
        self.urls()
        try:
            subprocess.run([sys.executable, "-m", "blog_api.main"], cwd=BACKEND_DIR)
        except KeyboardInterrupt:
            logger.info("\n[SUCCESS] Server stopped")

    # ─── Database ─────────────────────────────────────────
    def init_db(self) -> None:
        """Apply Alembic migrations up to head."""
        logger.info("\n=== Database Initialisation ===")
        self._run([sys.executable, "-m", "alembic", "upgrade", "head"])
        logger.info("[SUCCESS] Database migrations applied!")

    def create_schema(self) -> None:
        """Create tables straight from the models (development databases only)."""
        logger.info("\n=== Creating Schema From Models ===")
        code = (
            "import asyncio\n"
            "from blog_api.db.models import Base\n"
            "from blog_api.db.session import engine\n"
            "async def main():\n"
            "    async with engine.begin() as conn:\n"
            "        await conn.run_sync(Base.metadata.create_all)\n"
            "    await engine.dispose()\n"
            "asyncio.run(main())\n"
        )
        self._run([sys.executable, "-c", code])
        logger.info("[SUCCESS] Tables created!")

    def seed(self) -> None:
        """Insert development seed data."""
        logger.info("\n=== Seeding Database ===")
        self._run([sys.executable, "-m", "scripts.seed_blog"])
        logger.info("[SUCCESS] Seed data inserted!")

    # ─── Smoke Test ───────────────────────────────────────
    def test(self, user_id: int = 1) -> None:
        """Quick smoke-test of a running server."""
        logger.info("\n=== Smoke Test ===")

        checks = [
            ("health", "/health", None, 200),
            ("identity required", "/users", None, 403),
            ("users", "/users", user_id, 200),
            ("feed", "/feed?take=5", user_id, 200),
        ]
        failures = 0
        for name, path, caller, expected in checks:
            try:
                status, body = self._request(path, caller)
            except urllib.error.URLError as exc:
                logger.error(f"[ERROR] {name}: server unreachable ({exc.reason})")
                failures += 1
                continue
            if status == expected:
                size = len(body) if isinstance(body, list) else 1
                logger.info(f"[SUCCESS] {name}: {status} ({size} item(s))")
            else:
                logger.error(f"[ERROR] {name}: expected {expected}, got {status}")
                failures += 1

        if failures:
            raise RuntimeError(f"{failures} smoke check(s) failed")

    # ─── URLs ─────────────────────────────────────────────
    def urls(self) -> None:
        """Print access URLs."""
        logger.info("\n=== Access URLs ===")
        logger.info(f"🔧  API:               {self.base_url}")
        logger.info(f"📖  Swagger Docs:      {self.base_url}/docs")
        logger.info(f"❤️   Health Check:      {self.base_url}/health")


# ═══════════════════════════════════════════════════════════
#  CLI
# ═══════════════════════════════════════════════════════════

_C = ColorFormatter.COLORS

USAGE = f"""
{_C['HEADER']}Scoped Blog API — Management{_C['RESET']}
{'═' * 50}

{_C['BOLD']}Usage:{_C['RESET']} python manage.py <command> [options]

{_C['BOLD']}Commands:{_C['RESET']}
    {_C['INFO']}serve{_C['RESET']}           Run the API server
    {_C['INFO']}init-db{_C['RESET']}         Run Alembic migrations
    {_C['INFO']}create-schema{_C['RESET']}   Create tables from models (dev only)
    {_C['INFO']}seed{_C['RESET']}            Insert development seed data
    {_C['INFO']}test{_C['RESET']}            Smoke-test a running server
    {_C['INFO']}urls{_C['RESET']}            Show access URLs

{_C['BOLD']}Options:{_C['RESET']}
    --port=PORT     Server port for 'test' and 'urls' (default: $APP_PORT or 3000)
    --user=ID       Caller identity used by 'test' (default: 1)

{_C['BOLD']}Examples:{_C['RESET']}
    python manage.py init-db
    python manage.py seed
    python manage.py serve
    python manage.py test --user=2
"""


def _option(opts: List[str], name: str) -> Optional[str]:
    for o in opts:
        if o.startswith(f"--{name}="):
            return o.split("=", 1)[1]
    return None


def main() -> None:
    if len(sys.argv) < 2 or sys.argv[1] in ("-h", "--help"):
        print(USAGE)
        sys.exit(0)

    command = sys.argv[1]
    opts = sys.argv[2:]

    port = _option(opts, "port")
    mgr = ProjectManager(port=int(port) if port else None)

    try:
        if command == "serve":
            mgr.serve()
        elif command == "init-db":
            mgr.init_db()
        elif command == "create-schema":
            mgr.create_schema()
        elif command == "seed":
            mgr.seed()
        elif command == "test":
            mgr.test(user_id=int(_option(opts, "user") or 1))
        elif command == "urls":
            mgr.urls()
        else:
            logger.error(f"Unknown command: {command}")
            print(USAGE)
            sys.exit(1)
    except Exception as exc:
        logger.error(f"Operation failed: {exc}")
        sys.exit(1)


if __name__ == "__main__":
    main()

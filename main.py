#!/usr/bin/env python3
"""
NocBook - People import service
===============================

Single-command run:  python main.py

Create an owner and print its API token:
    flask --app main create-user you@example.com

See config.py for all environment-variable tunables.
"""

from __future__ import annotations

import logging

import click
from flask import Flask, jsonify

import config
from auth import new_token
from db import init_db, get_session, User
from api import api_bp


def configure_logging(level: str = config.LOG_LEVEL) -> None:
    logging.basicConfig(format="%(asctime)s %(levelname)-7s %(name)s: %(message)s")
    # basicConfig is a no-op once handlers exist, so set the level directly
    logging.getLogger().setLevel(getattr(logging, level, logging.INFO))


def create_app(db_url: str | None = None) -> Flask:
    """Flask application factory."""

    configure_logging()

    app = Flask(__name__)
    app.secret_key = config.SECRET
    app.config["MAX_CONTENT_LENGTH"] = config.MAX_UPLOAD_MB * 1024 * 1024

    # ── Initialise database ─────────────────────────────────────────
    init_db(db_url or config.DB_URL)

    # ── Register blueprints ─────────────────────────────────────────
    app.register_blueprint(api_bp)

    @app.route("/health")
    def health():
        return jsonify({"ok": True})

    # ── Error handlers ──────────────────────────────────────────────
    @app.errorhandler(404)
    def _404(e):
        return jsonify({"error": "not found"}), 404

    @app.errorhandler(500)
    def _500(e):
        return jsonify({"error": "internal server error"}), 500

    # ── CLI ─────────────────────────────────────────────────────────
    @app.cli.command("create-user")
    @click.argument("email")
    def create_user(email):
        """Create an owner account and print its API token."""
        session = get_session()
        try:
            user = User(email=email.strip().lower(), api_token=new_token())
            session.add(user)
            session.commit()
            click.echo(f"{user.email}: {user.api_token}")
        finally:
            session.close()

    return app


def main():
    print("=" * 56)
    print("  NocBook - People import")
    print("=" * 56)

    app = create_app()
    print(f"  Database: {config.DB_URL}")
    print(f"\n  http://{config.HOST}:{config.PORT}")
    print("=" * 56)

    app.run(host=config.HOST, port=config.PORT, debug=config.DEBUG)


if __name__ == "__main__":
    main()

"""
api.routes_export - /people/export endpoint.
"""

import io
import time

from flask import request, jsonify, send_file

from api import api_bp
from auth import current_user
from db import get_session
from services.people_service import PeopleService
import config


@api_bp.route("/export")
def export_people():
    """
    GET /people/export?format=xlsx|csv&role=&tag=&skill=

    Downloads the caller's people in the import column layout.
    Empty filters export everyone.
    """
    session = get_session()
    try:
        user = current_user(session)
        if user is None:
            return jsonify({"error": "Unauthorized"}), 401

        fmt = request.args.get("format", "xlsx").strip().lower()
        if fmt not in config.EXPORT_FORMATS:
            return jsonify({"error": "Invalid export format. Use xlsx or csv."}), 400

        people = PeopleService.list_for_owner(
            session, user.id,
            role=request.args.get("role", "").strip() or None,
            tag=request.args.get("tag", "").strip() or None,
            skill=request.args.get("skill", "").strip() or None,
        )
        payload, mimetype = PeopleService.export(people, fmt)
    finally:
        session.close()

    return send_file(
        io.BytesIO(payload),
        mimetype=mimetype,
        as_attachment=True,
        download_name=f"nocbook-people-{int(time.time() * 1000)}.{fmt}",
    )

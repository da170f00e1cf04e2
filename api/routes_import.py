"""
api.routes_import - /people/import endpoints.

Accepts a CSV / XLSX / XLS upload via multipart form and imports each
row as a Person owned by the caller.
"""

import io
import logging

from flask import request, jsonify, send_file
from werkzeug.exceptions import HTTPException

from api import api_bp
from auth import current_user
from db import get_session
from import_engine import (
    run_import, ImportOptions, SqlPeopleStore, build_template,
    UnsupportedFormatError, EmptyFileError,
)
import config

logger = logging.getLogger(__name__)

XLSX_MIMETYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


@api_bp.route("/import", methods=["POST"])
def import_people():
    """
    POST /people/import

    Multipart: field 'file' (.csv/.xlsx/.xls), field 'skipDuplicates'
    ("true" skips rows that look like existing people).

    200 with {success, failed, duplicates, errors, duplicateRecords}
    even when some or all rows failed.
    """
    session = get_session()
    try:
        user = current_user(session)
        if user is None:
            return jsonify({"error": "Unauthorized"}), 401

        f = request.files.get("file")
        if not f or not f.filename:
            return jsonify({"error": "No file provided"}), 400

        options = ImportOptions(
            skip_duplicates=request.form.get("skipDuplicates") == "true",
        )
        content = f.read()

        try:
            result = run_import(
                content, f.filename,
                store=SqlPeopleStore(session),
                owner_id=user.id,
                options=options,
            )
        except UnsupportedFormatError:
            return jsonify({"error": "Invalid file format. Only CSV, XLS, XLSX are supported."}), 400
        except EmptyFileError:
            return jsonify({"error": "File is empty or invalid format"}), 400

        session.commit()
        return jsonify(result.to_dict())
    except HTTPException:
        # 413 and friends go to the blueprint error handlers
        session.rollback()
        raise
    except Exception as exc:
        session.rollback()
        logger.exception("Import error")
        return jsonify({"error": str(exc) or "Import failed"}), 500
    finally:
        session.close()


@api_bp.route("/import/template")
def import_template():
    """GET /people/import/template - example workbook with instructions."""
    return send_file(
        io.BytesIO(build_template()),
        mimetype=XLSX_MIMETYPE,
        as_attachment=True,
        download_name=config.TEMPLATE_FILENAME,
    )

from __future__ import annotations

import logging

from flask import Flask, jsonify, request
from werkzeug.utils import secure_filename

from ..container import Container
from ..core.exceptions import ValidationError
from .service import UploadedFile

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    @app.route("/api/attendance/upload", methods=["POST"], endpoint="api_attendance_upload")
    def api_attendance_upload():
        """Upload one or more biometric exports (multipart field ``attendanceFiles``)."""
        try:
            uploads = [
                UploadedFile(filename=secure_filename(f.filename or "") or "upload", content=f.read())
                for f in request.files.getlist("attendanceFiles")
            ]
            summary = container.ingestion_service.ingest(uploads)
            return jsonify({"msg": "Attendance files processed", "results": summary.to_dict()}), 200
        except ValidationError as e:
            return jsonify({"msg": str(e)}), 400
        except Exception:
            logger.exception("Attendance upload failed")
            return jsonify({"msg": "Server error while processing attendance files"}), 500

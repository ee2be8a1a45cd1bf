from __future__ import annotations

import logging

from flask import Flask, jsonify

from ..common.validators import require_month
from ..container import Container
from ..core.exceptions import ValidationError

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    @app.route("/api/attendance/reclassify/<month>", methods=["POST"], endpoint="api_attendance_reclassify")
    def api_attendance_reclassify(month: str):
        try:
            month = require_month(month)
            count = container.attendance_service.reclassify_month(month)
            return jsonify({"month": month, "reclassified": count}), 200
        except ValidationError as e:
            return jsonify({"msg": str(e)}), 400
        except Exception:
            logger.exception("Reclassification failed for %s", month)
            return jsonify({"msg": "Server error while reclassifying attendance"}), 500

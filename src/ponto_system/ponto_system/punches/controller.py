from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_iso_date, parse_month
from ..common.session import current_session_user, json_error, login_required
from ..core.constants import GEOLOCATION_MAX_TIMEOUT_SECONDS
from ..core.exceptions import AuthenticationError, ExternalServiceError, NotFoundError, ValidationError
from ..container import Container
from .model import KIND_LABELS


def register(app: Flask, container: Container) -> None:
    def _domain_error(e: Exception):
        if isinstance(e, ValidationError):
            return json_error(str(e), 400)
        if isinstance(e, AuthenticationError):
            return json_error(str(e), 401)
        if isinstance(e, NotFoundError):
            return json_error(str(e), 404)
        if isinstance(e, ExternalServiceError):
            return json_error(str(e), 503)
        raise e

    @app.route("/api/config", methods=["GET"], endpoint="api_config")
    def api_config():
        schema = container.punch_service.aggregator.schema
        return jsonify(
            {
                "success": True,
                "tipos": [k.value for k in schema.kinds],
                "labels": {k.value: KIND_LABELS[k] for k in schema.kinds},
                "geolocalizacao": {
                    "timeout_segundos": app.config.get("GEOLOCATION_TIMEOUT_SECONDS", GEOLOCATION_MAX_TIMEOUT_SECONDS),
                    "obrigatoria": bool(app.config.get("REQUIRE_LOCATION", False)),
                },
            }
        )

    @app.route("/api/registrar-ponto", methods=["POST"], endpoint="api_register_punch")
    @login_required
    def api_register_punch():
        data = request.get_json(silent=True) or {}
        try:
            receipt = container.punch_service.register_punch(
                current_session_user(),
                kind=data.get("tipo", ""),
                timestamp=data.get("timestamp"),
                latitude=data.get("latitude"),
                longitude=data.get("longitude"),
                note=data.get("observacao"),
                location_error=data.get("erroLocalizacao"),
            )
        except (ValidationError, AuthenticationError, ExternalServiceError) as e:
            return _domain_error(e)
        except Exception:
            app.logger.exception("punch registration failed")
            return json_error("Erro ao registrar ponto", 500)

        return jsonify({"success": True, "message": receipt.message, "registro": receipt.event.to_dict()}), 201

    @app.route("/api/registros", methods=["GET"], endpoint="api_list_punches")
    @login_required
    def api_list_punches():
        day_s = request.args.get("dia")
        month_s = request.args.get("mes")
        try:
            events = container.punch_service.list_punches(
                current_session_user(),
                day=parse_iso_date(day_s) if day_s else None,
                month=parse_month(month_s) if month_s else None,
            )
        except (ValidationError, AuthenticationError, ExternalServiceError) as e:
            return _domain_error(e)

        return jsonify({"success": True, "registros": [e.to_dict() for e in events]})

    @app.route("/api/registros/<int:punch_id>", methods=["GET"], endpoint="api_get_punch")
    @login_required
    def api_get_punch(punch_id: int):
        try:
            event = container.punch_service.get_punch(current_session_user(), punch_id)
        except (AuthenticationError, NotFoundError, ExternalServiceError) as e:
            return _domain_error(e)
        return jsonify({"success": True, "registro": event.to_dict()})

    @app.route("/api/status", methods=["GET"], endpoint="api_status")
    @login_required
    def api_status():
        day_s = request.args.get("dia")
        try:
            data = container.punch_service.dashboard(
                current_session_user(),
                today=parse_iso_date(day_s) if day_s else None,
            )
        except (ValidationError, AuthenticationError, ExternalServiceError) as e:
            return _domain_error(e)
        return jsonify({"success": True, **data})

    @app.route("/api/relatorio", methods=["GET"], endpoint="api_month_report")
    @login_required
    def api_month_report():
        month_s = request.args.get("mes")
        try:
            if not month_s:
                raise ValidationError("Informe o mês (mes=AAAA-MM)")
            year, month = parse_month(month_s)
            data = container.report_service.build_month_report(current_session_user(), year=year, month=month)
        except (ValidationError, AuthenticationError, ExternalServiceError) as e:
            return _domain_error(e)
        return jsonify({"success": True, "dias": data.rows, "resumo": data.summary})

    @app.route("/api/exportar.csv", methods=["GET"], endpoint="api_export_csv")
    @login_required
    def api_export_csv():
        month_s = request.args.get("mes")
        try:
            export = container.report_service.export_csv(
                current_session_user(),
                month=parse_month(month_s) if month_s else None,
            )
        except (ValidationError, AuthenticationError, ExternalServiceError) as e:
            return _domain_error(e)

        return app.response_class(
            export.content,
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename={export.filename}"},
        )

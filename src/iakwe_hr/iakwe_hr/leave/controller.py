from __future__ import annotations

from datetime import date

from flask import Flask, g, jsonify, request

from ..common.web import actor_required, data_response, json_body
from ..core.constants import CULTURAL_CONTEXTS, CULTURAL_GUIDANCE, DEFAULT_LIST_LIMIT
from ..core.enums import LeaveType
from ..core.exceptions import ValidationError
from ..container import Container


def _int_arg(name: str, default=None):
    value = request.args.get(name)
    if value in (None, ""):
        return default
    try:
        return int(value)
    except ValueError:
        raise ValidationError(f"{name} must be a number")


def register(app: Flask, container: Container) -> None:
    leave = container.leave_service
    login_required = actor_required(container)

    def _serialize_day(day: dict) -> dict:
        return {"date": day["date"], "leaves": [r.to_dict() for r in day["leaves"]]}

    @app.route("/api/leave-requests/options", methods=["GET"], endpoint="leave_options")
    @login_required
    def leave_options():
        return jsonify(
            {
                "leave_types": [t.value for t in LeaveType],
                "cultural_contexts": list(CULTURAL_CONTEXTS),
                "cultural_guidance": CULTURAL_GUIDANCE,
            }
        )

    @app.route("/api/leave-requests", methods=["GET"], endpoint="list_leave_requests")
    @login_required
    def list_leave_requests():
        result = leave.list_leave_requests(
            g.actor,
            order_by=request.args.get("order_by") or "-created_at",
            limit=_int_arg("limit", DEFAULT_LIST_LIMIT),
            status=request.args.get("status"),
            leave_type=request.args.get("leave_type"),
        )
        return jsonify(data_response(result, lambda r: r.to_dict(), notice="Unable to load leave requests"))

    @app.route("/api/leave-requests", methods=["POST"], endpoint="create_leave_request")
    @login_required
    def create_leave_request():
        body = json_body()
        if "total_days" in body or "status" in body:
            raise ValidationError("total_days and status are set by the system")
        req = leave.create_leave_request(
            g.actor,
            employee_id=body.get("employee_id"),
            leave_type=body.get("leave_type"),
            start_date=body.get("start_date"),
            end_date=body.get("end_date"),
            reason=body.get("reason"),
            cultural_context=body.get("cultural_context"),
        )
        return jsonify(req.to_dict()), 201

    @app.route("/api/leave-requests/preview", methods=["GET"], endpoint="preview_leave_request")
    @login_required
    def preview_leave_request():
        summary = leave.preview(request.args.get("start_date"), request.args.get("end_date"))
        if summary is None:
            return jsonify({"total_days": None, "holidays": [], "holiday_notice": "", "range_notice": ""})
        return jsonify(summary.to_dict())

    @app.route("/api/leave-requests/summary", methods=["GET"], endpoint="leave_summary")
    @login_required
    def leave_summary():
        summary, result = leave.summary(g.actor, leave_type=request.args.get("leave_type"))
        payload = {**summary.to_dict(), "source": "degraded" if result.is_degraded else "live"}
        if result.is_degraded:
            payload["notice"] = "Unable to load leave requests"
        return jsonify(payload)

    @app.route("/api/leave-requests/calendar", methods=["GET"], endpoint="leave_calendar")
    @login_required
    def leave_calendar():
        today = date.today()
        days, result = leave.calendar(
            g.actor,
            year=_int_arg("year", today.year),
            month=_int_arg("month", today.month),
        )
        payload = {"days": [_serialize_day(d) for d in days], "source": "degraded" if result.is_degraded else "live"}
        if result.is_degraded:
            payload["notice"] = "Unable to load leave requests"
        return jsonify(payload)

    @app.route("/api/leave-requests/<request_id>", methods=["GET"], endpoint="get_leave_request")
    @login_required
    def get_leave_request(request_id: str):
        details = leave.get_details(g.actor, request_id)
        payload = {
            **details.request.to_dict(),
            "actions": details.actions,
            "comments": [c.to_dict() for c in details.comments],
            "holidays": list(details.holidays),
            "comments_source": "degraded" if details.comments_degraded else "live",
        }
        if details.comments_degraded:
            payload["comments_notice"] = "Unable to load comments"
        return jsonify(payload)

    @app.route("/api/leave-requests/<request_id>/approve", methods=["POST"], endpoint="approve_leave")
    @login_required
    def approve_leave(request_id: str):
        body = json_body()
        req = leave.approve(g.actor, request_id, version=body.get("version"))
        return jsonify(req.to_dict())

    @app.route("/api/leave-requests/<request_id>/reject", methods=["POST"], endpoint="reject_leave")
    @login_required
    def reject_leave(request_id: str):
        body = json_body()
        req = leave.reject(
            g.actor,
            request_id,
            version=body.get("version"),
            rejection_reason=body.get("rejection_reason", ""),
        )
        return jsonify(req.to_dict())

    @app.route("/api/leave-requests/<request_id>/cancel", methods=["POST"], endpoint="cancel_leave")
    @login_required
    def cancel_leave(request_id: str):
        body = json_body()
        req = leave.cancel(g.actor, request_id, version=body.get("version"))
        return jsonify(req.to_dict())

    @app.route("/api/leave-requests/<request_id>/comments", methods=["POST"], endpoint="comment_leave")
    @login_required
    def comment_leave(request_id: str):
        body = json_body()
        comment = leave.add_comment(g.actor, request_id, body.get("comment", ""))
        return jsonify(comment.to_dict()), 201

    @app.route("/api/employees/<employee_id>/leave-requests", methods=["GET"], endpoint="employee_leave_requests")
    @login_required
    def employee_leave_requests(employee_id: str):
        result = leave.filter_leave_requests(g.actor, employee_id=employee_id)
        return jsonify(data_response(result, lambda r: r.to_dict(), notice="Unable to load leave requests"))

    @app.route("/api/employees/<employee_id>/leave-balance", methods=["GET"], endpoint="employee_leave_balance")
    @login_required
    def employee_leave_balance(employee_id: str):
        balance, result = leave.leave_balance(g.actor, employee_id)
        payload = {**balance, "source": "degraded" if result.is_degraded else "live"}
        if result.is_degraded:
            payload["notice"] = "Unable to load leave requests"
        return jsonify(payload)

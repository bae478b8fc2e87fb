from __future__ import annotations

from flask import Flask, g, jsonify, request

from ..common.web import actor_required, data_response, json_body
from ..container import Container


def register(app: Flask, container: Container) -> None:
    employees = container.employee_service
    login_required = actor_required(container)

    @app.route("/api/employees", methods=["GET"], endpoint="list_employees")
    @login_required
    def list_employees():
        if request.args.get("active") in {"1", "true", "yes"}:
            result = employees.list_active(g.actor)
        else:
            result = employees.list_directory(g.actor, status=request.args.get("status"))
        return jsonify(data_response(result, lambda e: e.to_dict(), notice="Unable to load employees"))

    @app.route("/api/employees", methods=["POST"], endpoint="add_employee")
    @login_required
    def add_employee():
        emp = employees.add_employee(g.actor, json_body())
        return jsonify(emp.to_dict()), 201

    @app.route("/api/employees/<employee_id>", methods=["GET"], endpoint="get_employee")
    @login_required
    def get_employee(employee_id: str):
        return jsonify(employees.get(g.actor, employee_id).to_dict())

    @app.route("/api/employees/<employee_id>", methods=["PATCH"], endpoint="update_employee")
    @login_required
    def update_employee(employee_id: str):
        body = json_body()
        changes = {k: v for k, v in body.items() if k != "version"}
        emp = employees.update_employee(g.actor, employee_id, changes, version=body.get("version"))
        return jsonify(emp.to_dict())

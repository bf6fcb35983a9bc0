from __future__ import annotations

from flask import Flask, jsonify, request

from ..container import Container
from ..users.controller import api_endpoint
from .service import contact_completeness, directory_stats


def register(app: Flask, container: Container) -> None:
    @app.route("/api/directory", methods=["GET"], endpoint="directory")
    @api_endpoint(container, super_admin=True)
    def directory():
        contacts = container.directory_service.list_contacts(
            branch=request.args.get("branch") or None,
            search=request.args.get("search", ""),
        )
        return jsonify(
            {
                "contacts": [
                    {
                        "employee_id": c.employee_id,
                        "full_name": c.full_name,
                        "branch_id": c.branch_id,
                        "branch_name": c.branch_name,
                        "position": c.position,
                        "phone": c.phone,
                        "email": c.email,
                        "mobile_money_number": c.mobile_money_number,
                        "home_address": c.home_address,
                        "nrc_number": c.nrc_number,
                        "tpin": c.tpin,
                        "bank_name": c.bank_name,
                        "bank_account_number": c.bank_account_number,
                        "social_security_number": c.social_security_number,
                        "emergency_contact_name": c.emergency_contact_name,
                        "emergency_contact_phone": c.emergency_contact_phone,
                        "date_started": c.date_started.isoformat() if c.date_started else None,
                        "completeness": contact_completeness(c),
                    }
                    for c in contacts
                ],
                "stats": directory_stats(contacts),
            }
        )

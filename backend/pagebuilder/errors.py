from flask import jsonify
from pagebuilder.application.layouts.exceptions import LayoutNotFound
from pagebuilder.domain.invariants.exceptions import InvariantViolation


def register_error_handlers(app):
    @app.errorhandler(InvariantViolation)
    def handle_invariant_violation(error):
        response = jsonify({
            "error": "InvariantViolation",
            "message": str(error)
        })
        response.status_code = 400
        return response

    @app.errorhandler(LayoutNotFound)
    def handle_layout_not_found(error):
        response = jsonify({
            "error": "LayoutNotFound",
            "message": str(error)
        })
        response.status_code = 404
        return response

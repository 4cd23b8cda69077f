"""
Preferences Routes - Theme and language toggles
"""

from flask import request, redirect, url_for, jsonify, abort, current_app
from utils.decorators import with_portfolio_state, wants_json
from . import preferences_bp


def _toggle_response(state, started, what):
    if not started:
        current_app.logger.info(f"{what} toggle rejected for {state.visitor_id}: transition in progress")
        if wants_json():
            abort(409, description=f'A {what} change is already in progress.')
        return redirect(url_for('pages.index'))

    if wants_json():
        return jsonify(state.snapshot()), 202
    return redirect(url_for('pages.index'))


@preferences_bp.route('', methods=['GET'])
@with_portfolio_state
def snapshot(state):
    """Current theme, language and transition flags of the visitor"""
    return jsonify(state.snapshot())


@preferences_bp.route('/theme', methods=['POST'])
@with_portfolio_state
def toggle_theme(state):
    """Switch to the requested theme, or to the opposite one"""
    if request.is_json:
        payload = request.get_json(silent=True) or {}
        if not isinstance(payload, dict):
            abort(400, description='Expected a JSON object.')
        requested = payload.get('theme')
    else:
        requested = request.form.get('theme')
    if requested is not None and not isinstance(requested, str):
        abort(400, description='Invalid theme selected.')

    try:
        started = state.theme.toggle(requested or None)
    except ValueError:
        abort(400, description='Invalid theme selected.')

    current_app.logger.info(f"Theme toggle for {state.visitor_id}: target={requested or 'opposite'} started={started}")
    return _toggle_response(state, started, 'theme')


@preferences_bp.route('/language', methods=['POST'])
@with_portfolio_state
def toggle_language(state):
    """Switch to the other supported language"""
    started = state.locale.toggle()
    current_app.logger.info(f"Language toggle for {state.visitor_id}: started={started}")
    return _toggle_response(state, started, 'language')

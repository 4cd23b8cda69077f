"""
Contact Routes - Contact form modal and submission
"""

from flask import request, redirect, url_for, abort, current_app
from utils.contact import CONTACT_FIELDS
from utils.decorators import with_portfolio_state, wants_json
from utils.notifications import flash_notification
from . import contact_bp


@contact_bp.route('/open', methods=['POST'])
@with_portfolio_state
def open_modal(state):
    """Show the contact modal with an empty form"""
    state.contact.open()
    return redirect(url_for('pages.index', _anchor='contact'))


@contact_bp.route('/close', methods=['POST'])
@with_portfolio_state
def close_modal(state):
    """Hide the modal and discard the form"""
    state.contact.close()
    if wants_json():
        return '', 204
    return redirect(url_for('pages.index'))


@contact_bp.route('/field', methods=['POST'])
@with_portfolio_state
def field_change(state):
    """Mirror one keystroke: ``{"field": ..., "value": ...}``"""
    payload = request.get_json(silent=True) if request.is_json else request.form
    payload = payload or {}
    if request.is_json and not isinstance(payload, dict):
        abort(400, description='Expected a JSON object.')
    field_id = payload.get('field', '')
    value = payload.get('value', '')
    if not isinstance(value, str):
        abort(400, description='Field value must be text.')

    try:
        state.contact.on_field_change(field_id, value)
    except KeyError:
        abort(400, description=f'Unknown field: {field_id}')
    return '', 204


@contact_bp.route('', methods=['POST'])
@with_portfolio_state
def submit(state):
    """Send the form to the relay; keep the modal open on failure"""
    for field_id in CONTACT_FIELDS:
        if field_id in request.form:
            state.contact.on_field_change(field_id, request.form[field_id])

    current_app.logger.info(f"Contact form submitted by visitor {state.visitor_id}")
    sent = state.contact.on_submit(flash_notification)
    if sent:
        return redirect(url_for('pages.index'))
    return redirect(url_for('pages.index', _anchor='contact'))

"""
Pages Routes - The portfolio page and CV download
"""

import os
from flask import render_template, request, send_from_directory, abort, current_app
from utils.decorators import with_portfolio_state
from utils.notifications import flash_notification, build_notification, pop_notifications
from utils.ui_helpers import (
    build_sections,
    get_body_classes,
    get_html_classes,
    get_page_specific_class,
    get_refresh_after,
    get_toggle_context,
    get_wrapper_class
)
from . import pages_bp


@pages_bp.route('/')
@with_portfolio_state
def index(state):
    """Single page: hero, about, projects, skills and contact"""
    portfolio = current_app.extensions['portfolio_data']
    page_class = get_page_specific_class(
        request.blueprint,
        request.endpoint.split('.')[-1] if request.endpoint else None
    )

    return render_template('index.html',
                           state=state,
                           t=state.locale.translate,
                           language=state.locale.language,
                           sections=build_sections(state, portfolio),
                           toggles=get_toggle_context(state),
                           contact=state.contact,
                           toasts=pop_notifications(),
                           html_classes=get_html_classes(state),
                           body_classes=get_body_classes(state, page_class),
                           wrapper_class=get_wrapper_class(state),
                           refresh_after=get_refresh_after(state))


@pages_bp.route('/download-cv')
@with_portfolio_state
def download_cv(state):
    """Send the CV as an attachment and announce it with a toast"""
    cv = current_app.extensions['portfolio_data'].get('profile', {}).get('cv', {})
    filename = cv.get('file')
    if not filename:
        abort(404, description='No CV is configured.')

    directory = os.path.join(current_app.static_folder, 'files')
    if not os.path.isfile(os.path.join(directory, filename)):
        current_app.logger.error(f"CV file missing: {filename}")
        abort(404, description='CV file not found.')

    flash_notification(build_notification(state.locale.translate, 'toast.download'))
    current_app.logger.info(f"CV download by visitor {state.visitor_id}")
    return send_from_directory(directory, filename,
                               as_attachment=True,
                               download_name=cv.get('download_name') or filename)

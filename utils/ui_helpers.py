"""
UI Helper Functions for the Presentation Shell
==============================================

Turns a visitor's PortfolioState into the values the templates render:
marker classes for <html> and <body>, the toggle buttons and the section
content in the active language.
"""

import math
from typing import Dict, List, Optional
from flask import current_app
from .data import localize, localize_projects
from .theme import DARK, opposite

# Wrapper opacity while a value change is in progress
TRANSITIONING_CLASS = 'opacity-50'
SETTLED_CLASS = 'opacity-100'


def get_page_specific_class(blueprint_name: Optional[str], route_name: Optional[str] = None) -> str:
    """
    CSS class for a page, e.g. ``page-pages page-pages-index``
    """
    if not blueprint_name:
        return 'page-default'

    classes = [f'page-{blueprint_name}']

    if route_name:
        classes.append(f'page-{blueprint_name}-{route_name}')

    return ' '.join(classes)


def get_html_classes(state) -> str:
    return str(state.markers.root)


def get_body_classes(state, page_class: str = '') -> str:
    classes: List[str] = list(state.markers.body)
    if page_class:
        classes.append(page_class)
    return ' '.join(classes)


def get_wrapper_class(state) -> str:
    return TRANSITIONING_CLASS if state.is_transitioning else SETTLED_CLASS


def get_refresh_after(state) -> Optional[int]:
    """Whole seconds until an in-flight transition has settled, else None"""
    durations = [store.transitions.duration
                 for store in (state.theme, state.locale) if store.is_transitioning]
    if not durations:
        return None
    return max(1, math.ceil(max(durations)))


def get_toggle_context(state) -> Dict[str, str]:
    """Labels and targets of the theme and language buttons"""
    t = state.locale.translate
    current = state.theme.theme
    return {
        'theme_icon': 'sun' if current == DARK else 'moon',
        'theme_target': opposite(current),
        'theme_label': t(f'toggles.theme.{opposite(current)}'),
        'language_label': t('toggles.language'),
        'language_target': state.locale.other_language(),
    }


def build_sections(state, portfolio: Dict) -> Dict:
    """Content of the hero, about, projects, skills and contact sections"""
    language = state.locale.language
    fallback = current_app.config.get('DEFAULT_LANGUAGE', 'es')
    skills = [
        {
            'name': skill.get('name', ''),
            'description': localize(skill.get('description'), language, fallback),
            'image': skill.get('image', ''),
        }
        for skill in portfolio.get('skills', [])
    ]
    return {
        'profile': portfolio.get('profile', {}),
        'social': portfolio.get('social', {}),
        'projects': localize_projects(portfolio.get('projects', []), language, fallback),
        'skills': skills,
    }

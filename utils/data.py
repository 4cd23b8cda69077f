"""
Data Management Module - Loads the portfolio content shown by the shell
"""

import json
import logging

logger = logging.getLogger(__name__)


def get_default_portfolio_data():
    """Return the empty portfolio structure used when the data file is unusable"""
    return {
        'profile': {
            'name': '',
            'cv': {'file': '', 'download_name': ''},
        },
        'social': {},
        'projects': [],
        'skills': [],
    }


def load_portfolio(path):
    """
    Load portfolio content from a JSON file.

    Args:
        path (str): location of the portfolio JSON file

    Returns:
        dict: portfolio data, or the default structure if unreadable
    """
    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except (FileNotFoundError, json.JSONDecodeError) as e:
        logger.error(f"Error loading portfolio data from {path}: {str(e)}")
        return get_default_portfolio_data()

    merged = get_default_portfolio_data()
    merged.update(data)
    logger.info(f"Loaded portfolio: {len(merged['projects'])} projects, {len(merged['skills'])} skills")
    return merged


def localize(value, language, fallback_language='es'):
    """Pick the ``language`` entry of a per-language dict; plain strings pass through"""
    if isinstance(value, dict):
        return value.get(language) or value.get(fallback_language) or ''
    return value or ''


def localize_projects(projects, language, fallback_language='es'):
    """Resolve per-language project fields for rendering"""
    return [
        {
            'title': project.get('title', ''),
            'description': localize(project.get('description'), language, fallback_language),
            'tags': project.get('tags', []),
            'url': project.get('url'),
            'image': project.get('image', ''),
        }
        for project in projects
    ]

"""
Routes Package
Exports all route blueprints
"""
from livepoll.routes.auth import auth_bp
from livepoll.routes.polls import polls_bp
from livepoll.routes.public import public_bp

__all__ = ['auth_bp', 'polls_bp', 'public_bp']

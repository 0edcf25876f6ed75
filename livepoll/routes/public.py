"""
Public Routes
Liveness endpoint
"""
from flask import Blueprint

public_bp = Blueprint('public', __name__)


@public_bp.route('/')
def index():
    """Plain-text liveness check"""
    return 'Live Polling Backend is running', 200, {'Content-Type': 'text/plain; charset=utf-8'}

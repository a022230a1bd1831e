from flask import render_template
from . import dashboard_bp
from utils.permissions import guard


@dashboard_bp.route('/dashboard')
def index():
    """Dashboard for the logged-in family"""
    return render_template('dashboard/index.html', user=guard())

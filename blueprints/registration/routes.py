"""
Registration routes.

  GET  /                    – entry form (logged-in families go to the dashboard)
  POST /submit-form         – store a pending registration
  GET  /uploads/<filename>  – serve a stored profile photo
"""
from flask import current_app, render_template, request, send_from_directory

from blueprints.registration import registration_bp
from blueprints.registration.forms import RegistrationForm
from services.errors import RegistryError
from services.registration_service import ACK_MESSAGE, RegistrationService
from utils.permissions import redirect_if_authenticated

TEXT = {'Content-Type': 'text/plain; charset=utf-8'}


@registration_bp.route('/', methods=['GET'])
@redirect_if_authenticated
def index():
    return render_template('registration/form.html', form=RegistrationForm())


@registration_bp.route('/submit-form', methods=['POST'])
def submit_form():
    form = RegistrationForm()
    if not form.validate_on_submit():
        # No field validators: only a missing or stale CSRF token lands here
        return 'Error: form expired, please reload the page and try again.', 400, TEXT

    field = current_app.config.get('UPLOAD_FIELD_NAME', 'files')
    try:
        RegistrationService.submit(request.form, request.files.get(field))
    except RegistryError as e:
        current_app.logger.error(f'Registration Error: {e}')
        return f'Error: {e}', 500, TEXT

    return ACK_MESSAGE, 200, TEXT


@registration_bp.route('/uploads/<path:filename>')
def uploaded_file(filename):
    return send_from_directory(current_app.config['UPLOAD_FOLDER'], filename)

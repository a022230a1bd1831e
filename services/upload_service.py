import os
import time
from uuid import uuid4

from flask import current_app
from werkzeug.utils import secure_filename


UPLOAD_URL_PREFIX = 'uploads'


class UploadService:
    """Stores profile photos in UPLOAD_FOLDER under generated, collision-free names."""

    @staticmethod
    def upload_folder():
        folder = current_app.config['UPLOAD_FOLDER']
        os.makedirs(folder, exist_ok=True)
        return folder

    @staticmethod
    def generate_filename(field_name, original_filename):
        """``<field>-<epoch ms>-<random><ext>``, keeping only a safe extension."""
        ext = os.path.splitext(secure_filename(original_filename or ''))[1].lower()
        stamp = int(time.time() * 1000)
        return f"{secure_filename(field_name) or 'file'}-{stamp}-{uuid4().hex[:8]}{ext}"

    @staticmethod
    def save(file_storage, field_name=None):
        """Persist an uploaded ``FileStorage``.

        Returns the retrievable path (``uploads/<name>``), or ``''`` when no
        file was chosen in the form.
        """
        if file_storage is None or not file_storage.filename:
            return ''

        field_name = field_name or current_app.config.get('UPLOAD_FIELD_NAME', 'files')
        filename = UploadService.generate_filename(field_name, file_storage.filename)
        file_storage.save(os.path.join(UploadService.upload_folder(), filename))

        current_app.logger.info(f'Stored upload {file_storage.filename!r} as {filename}')
        return f'{UPLOAD_URL_PREFIX}/{filename}'

    @staticmethod
    def delete(stored_path):
        """Remove a file previously returned by ``save``. Missing files are ignored."""
        if not stored_path:
            return
        filename = os.path.basename(stored_path)
        path = os.path.join(current_app.config['UPLOAD_FOLDER'], filename)
        try:
            os.remove(path)
        except FileNotFoundError:
            pass

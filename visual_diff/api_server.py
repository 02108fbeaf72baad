#!/usr/bin/env python3
"""
Visual Diff API Server
Upload two images, get the verdict, statistics and the rendered diff back as JSON.
"""

import os
import logging
import base64
from dotenv import load_dotenv

# Load environment variables first
load_dotenv()

from flask import Flask, request, jsonify, current_app
from flask_cors import CORS
from werkzeug.exceptions import RequestEntityTooLarge

from .exceptions import VisualDiffError, DimensionMismatchError, InvalidColorError, InvalidOptionError
from .models.rgb_color import RGBColor
from .models.visual_diff_options import VisualDiffOptions
from .models.visual_diff_result import VisualDiffResult
from .pipeline.compare_images import compare_images

logger = logging.getLogger(__name__)

# Configuration
MAX_CONTENT_LENGTH = int(os.getenv("UPLOAD_MAX_SIZE_MB", "50")) * 1024 * 1024

TRUE_VALUES = {"1", "true", "yes", "y", "on"}


def diff_image_to_base64(result: VisualDiffResult) -> str:
    """Convert the PNG diff image to a data URL for JSON responses."""
    base64_string = base64.b64encode(result.diff_image_buffer).decode('utf-8')
    return f"data:image/png;base64,{base64_string}"


def options_from_form(form) -> VisualDiffOptions:
    """
    Read optional comparison fields from a multipart form.
    Missing fields fall back to the VISUAL_DIFF_* environment defaults.
    """
    overrides = {}
    try:
        if form.get('threshold'):
            overrides['threshold'] = float(form['threshold'])
        if form.get('color_threshold'):
            overrides['color_threshold'] = int(form['color_threshold'])
    except ValueError as err:
        raise InvalidOptionError(f"Invalid numeric option: {err}") from err
    if form.get('color_a'):
        overrides['color1'] = RGBColor.parse(form['color_a'])
    if form.get('color_b'):
        overrides['color2'] = RGBColor.parse(form['color_b'])
    overrides['only_show_differences'] = form.get('only_show_differences', '').strip().lower() in TRUE_VALUES
    return VisualDiffOptions.from_env(**overrides)


def create_app() -> Flask:
    app = Flask(__name__)
    CORS(app)  # Enable CORS for frontend communication
    app.config['MAX_CONTENT_LENGTH'] = MAX_CONTENT_LENGTH

    @app.route('/api/health', methods=['GET'])
    def health():
        return jsonify({'status': 'ok'})

    @app.route('/api/compare', methods=['POST'])
    def compare():
        """Compare uploaded image_a (reference) against image_b (screenshot)."""
        for field in ('image_a', 'image_b'):
            if field not in request.files or request.files[field].filename == '':
                return jsonify({'error': 'missing_file', 'message': f'No {field} provided'}), 400

        try:
            options = options_from_form(request.form)
            result = compare_images(
                request.files['image_a'].read(),
                request.files['image_b'].read(),
                options,
            )
        except DimensionMismatchError as err:
            return jsonify({'error': 'dimension_mismatch', 'message': str(err)}), 422
        except (InvalidColorError, InvalidOptionError) as err:
            return jsonify({'error': 'invalid_option', 'message': str(err)}), 400
        except VisualDiffError as err:
            logger.warning(f"Comparison failed: {err}")
            return jsonify({'error': type(err).__name__, 'message': str(err)}), 400

        return jsonify({
            **result.to_dict(),
            'diff_image': diff_image_to_base64(result),
        })

    @app.errorhandler(RequestEntityTooLarge)
    def too_large(err):
        limit = current_app.config['MAX_CONTENT_LENGTH']
        return jsonify({'error': 'too_large', 'message': f'Upload exceeds {limit} bytes'}), 413

    return app


app = create_app()


def main():
    # --- Centralized Logging Configuration ---
    logging.basicConfig(
        level=os.getenv("VISUAL_DIFF_LOG_LEVEL", "INFO").upper(),
        format='%(asctime)s - %(name)-25s - %(levelname)-8s - %(message)s',
        datefmt='%H:%M:%S'
    )
    host = os.getenv("API_HOST", "0.0.0.0")
    port = int(os.getenv("API_PORT", "5000"))
    logger.info(f"Starting visual diff API on {host}:{port}")
    app.run(host=host, port=port, debug=False)


if __name__ == '__main__':
    main()

"""
Feedback Classification Review API

A non-intrusive Flask-based tool for reviewing how survey comments are labelled.
Comments and CSV exports are run through the existing classification engine and
returned with their labels and the category explanation trace, so reviewers can
see exactly which patterns fired.

This tool is read-only and does NOT modify any classification rules.
"""

import json
import os
import io
from datetime import datetime

from flask import Flask, request, jsonify, send_file
from werkzeug.utils import secure_filename
import pandas as pd

from feedback_engine import __version__, classify_comment
from feedback_batch_processor import FeedbackBatchProcessor, export_csv, generate_summary


app = Flask(__name__)
app.config['MAX_CONTENT_LENGTH'] = 50 * 1024 * 1024  # 50MB max upload size

# Initialize processor (read-only usage)
processor = FeedbackBatchProcessor()


def allowed_file(filename: str) -> bool:
    """Check if file extension is allowed."""
    return '.' in filename and filename.rsplit('.', 1)[1].lower() == 'csv'


@app.route('/')
def index():
    """Service information."""
    return jsonify({
        'service': 'feedback-classification-review',
        'version': __version__,
        'endpoints': ['/api/classify', '/upload', '/export/csv', '/export/json'],
    })


@app.route('/api/classify', methods=['POST'])
def classify():
    """
    Classify a single comment.

    Expects JSON body {"comment": "..."}; a null or empty comment is valid.
    """
    data = request.get_json(silent=True)

    if not isinstance(data, dict) or 'comment' not in data:
        return jsonify({'error': "Request body must be a JSON object with a 'comment' field"}), 400

    result = classify_comment(data['comment'])

    response = result.to_dict()
    response['CategoryScore'] = result.category_score
    return jsonify(response)


@app.route('/upload', methods=['POST'])
def upload_files():
    """
    Handle multiple CSV uploads and label every record.

    Returns JSON with labelled records and summary statistics.
    """
    if 'files' not in request.files:
        return jsonify({'error': 'No files provided'}), 400

    files = request.files.getlist('files')

    if not files or all(f.filename == '' for f in files):
        return jsonify({'error': 'No files selected'}), 400

    batch = []
    errors = []

    for file in files:
        if file and file.filename and allowed_file(file.filename):
            batch.append((secure_filename(file.filename), file.read()))
        elif file and file.filename:
            errors.append({
                'filename': file.filename,
                'error': 'Invalid file type. Only CSV files are allowed.'
            })

    result = processor.process_batch(batch)

    errors.extend(
        {'filename': error.file_name, 'error': error.error_message, 'error_type': error.error_type}
        for error in result.errors
    )
    failed_names = {error.file_name for error in result.errors}
    file_summaries = [
        {'filename': name, 'status': 'error' if name in failed_names else 'success'}
        for name, _ in batch
    ]

    if not result.records and errors:
        return jsonify({'error': 'All files failed to process', 'details': errors}), 400

    response = {
        'success': True,
        'files_processed': result.stats.successful,
        'file_summaries': file_summaries,
        'total_records': len(result.records),
        'results': result.records,
        'summary': generate_summary(result.records),
        'errors': errors if errors else None,
    }

    return jsonify(response)


def _results_from_request():
    """Pull the 'results' list out of an export request, or return an error response."""
    data = request.get_json(silent=True)

    if not data or 'results' not in data:
        app.logger.warning("Export: No results provided in request")
        return None, (jsonify({'error': 'No results provided'}), 400)

    results = data['results']

    if not isinstance(results, list):
        app.logger.error(f"Export: Results is not a list, got {type(results)}")
        return None, (jsonify({'error': 'Results must be an array'}), 400)

    return results, None


@app.route('/export/csv', methods=['POST'])
def export_csv_route():
    """
    Export labelled records to CSV format.

    Expects JSON body with 'results' field containing labelled records.
    """
    results, error_response = _results_from_request()
    if error_response:
        return error_response

    try:
        csv_data = export_csv(pd.DataFrame(results))

        timestamp = datetime.now().strftime('%Y%m%d_%H%M%S')
        filename = f'enhanced_nps_feedback_{timestamp}.csv'

        app.logger.info(f"CSV export: Successfully exported {len(results)} results")

        return send_file(
            io.BytesIO(csv_data),
            mimetype='text/csv',
            as_attachment=True,
            download_name=filename
        )
    except Exception as e:
        app.logger.error(f"CSV export error: {str(e)}", exc_info=True)
        return jsonify({'error': f'Failed to export CSV: {str(e)}'}), 500


@app.route('/export/json', methods=['POST'])
def export_json_route():
    """
    Export labelled records to JSON format.

    Expects JSON body with 'results' field containing labelled records.
    """
    results, error_response = _results_from_request()
    if error_response:
        return error_response

    try:
        timestamp = datetime.now().strftime('%Y%m%d_%H%M%S')
        filename = f'enhanced_nps_feedback_{timestamp}.json'

        json_data = json.dumps(results, indent=2).encode('utf-8')

        app.logger.info(f"JSON export: Successfully exported {len(results)} results")

        return send_file(
            io.BytesIO(json_data),
            mimetype='application/json',
            as_attachment=True,
            download_name=filename
        )
    except Exception as e:
        app.logger.error(f"JSON export error: {str(e)}", exc_info=True)
        return jsonify({'error': f'Failed to export JSON: {str(e)}'}), 500


if __name__ == '__main__':
    print("=" * 80)
    print("Feedback Classification Review API")
    print("=" * 80)
    print("\nStarting API on http://localhost:5001")
    print("This is a READ-ONLY tool that does not modify classification rules.")
    print("\nPress Ctrl+C to stop the server.")
    print("=" * 80)

    # Debug mode is controlled by environment variable
    # Set FLASK_DEBUG=1 only in development environments
    debug_mode = os.environ.get('FLASK_DEBUG', '0') == '1'
    if debug_mode:
        print("\n⚠️  WARNING: Running in DEBUG mode. Not suitable for production!")
        print("=" * 80)

    app.run(debug=debug_mode, port=5001, host='0.0.0.0')

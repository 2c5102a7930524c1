from flask import Flask, request, jsonify, render_template
from markupsafe import Markup
import os
from datetime import datetime, timezone
import logging

from bodygraph import generate_svg, is_gate_active
from calculations import DEFAULT_PIPELINE, run_pipeline

BASE_DIR = os.path.abspath(os.path.dirname(__file__))
TEMPLATE_DIR = os.path.join(BASE_DIR, 'templates')

HOST = os.getenv('HOST', '0.0.0.0')
PORT = int(os.getenv('PORT', 8080))
FLASK_DEBUG = os.getenv('FLASK_DEBUG', 'False').lower() == 'true'
LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')

# Every method reaches the page handlers; / also serves any unknown path
ALL_METHODS = ['GET', 'POST', 'PUT', 'PATCH', 'DELETE']

VERSION = '1.0.0'


def resolve_log_level(name):
    """Numeric logging level for a level name; unknown names fall back to INFO"""
    level = logging.getLevelName(str(name).upper())
    return level if isinstance(level, int) else logging.INFO


logging.basicConfig(level=resolve_log_level(LOG_LEVEL), format='%(asctime)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__)


def read_birth_data():
    """Birth fields from form or query values; missing fields become empty strings"""
    return (
        request.values.get('birthdate', ''),
        request.values.get('birthtime', ''),
        request.values.get('location', ''),
    )


def create_app(pipeline=None, template_folder=None):
    """
    Build the Flask application with its own routes.

    `pipeline` replaces the calculation stand-ins (see calculations.Pipeline);
    `template_folder` overrides where form.html and result.html are read from.
    """
    app = Flask(__name__, template_folder=template_folder or TEMPLATE_DIR)
    app.config['PIPELINE'] = pipeline or DEFAULT_PIPELINE

    @app.route('/', methods=ALL_METHODS)
    @app.route('/<path:path>', methods=ALL_METHODS)
    def handle_form(path=None):
        """Birth data form"""
        try:
            return render_template('form.html')
        except Exception as e:
            logger.error(f"Form page error: {str(e)}")
            return f"Request failed: {str(e)}", 500

    @app.route('/calculate', methods=ALL_METHODS)
    def handle_calculation():
        """Run the pipeline and render the bodygraph page"""
        try:
            birth_date, birth_time, location = read_birth_data()
            result = run_pipeline(app.config['PIPELINE'], birth_date, birth_time, location)

            return render_template(
                'result.html',
                svg=Markup(generate_svg(result['bodygraph'])),
                description=result['description']
            )

        except Exception as e:
            logger.error(f"Calculation page error: {str(e)}")
            return f"Request failed: {str(e)}", 500

    @app.route('/v1/bodygraph', methods=['GET', 'POST'])
    def get_bodygraph():
        """Same pipeline as /calculate, as JSON"""
        try:
            birth_date, birth_time, location = read_birth_data()
            result = run_pipeline(app.config['PIPELINE'], birth_date, birth_time, location)

            return jsonify({
                'date': birth_date,
                'time': birth_time,
                'location': location,
                'coordinates': result['coordinates'],
                'positions': result['positions'],
                'gates': sorted(gate for gate in result['bodygraph'] if is_gate_active(result['bodygraph'], gate)),
                'description': result['description'],
                'svg': generate_svg(result['bodygraph'])
            })

        except Exception as e:
            logger.error(f"Bodygraph endpoint error: {str(e)}")
            return jsonify({"error": f"Request failed: {str(e)}"}), 500

    @app.route('/health', methods=['GET'])
    def health_check():
        """Health check endpoint"""
        return jsonify({
            'status': 'healthy',
            'timestamp': datetime.now(timezone.utc).isoformat(),
            'templates_exist': os.path.isdir(app.template_folder),
            'version': VERSION
        })

    return app


app = create_app()

if __name__ == '__main__':
    logger.info(f"Server started on :{PORT}")
    app.run(debug=FLASK_DEBUG, host=HOST, port=PORT)

from flask import Flask, render_template, request, jsonify
import logging
import os, requests

from frontend.presentation import ScanDelay, build_view

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("frontend")

app = Flask(__name__, template_folder='templates', static_folder='static')

BACKEND_URL = os.getenv('BACKEND_URL', 'http://127.0.0.1:5050')
SCAN_DELAY = float(os.getenv('LURESCAN_SCAN_DELAY', '1.5'))
BACKEND_TIMEOUT = float(os.getenv('LURESCAN_BACKEND_TIMEOUT', '15'))


def _wants_json() -> bool:
    return request.is_json or request.accept_mimetypes.best == 'application/json'


@app.route('/', methods=['GET'])
def index():
    return render_template('index.html', view=build_view(None), url='')


@app.route('/submit', methods=['POST'])
def submit():
    data = request.get_json(silent=True) if request.is_json else request.form
    url = data.get('url') if isinstance(data, dict) else None
    url = url.strip() if isinstance(url, str) else ''
    if not url:
        if _wants_json():
            return jsonify({'error': 'missing url'}), 400
        return render_template('index.html', view=build_view(None), url=''), 400

    # "scanning" pause; the engine itself has no delay
    ScanDelay(SCAN_DELAY).wait()

    try:
        r = requests.post(f'{BACKEND_URL}/scan', json={'url': url}, timeout=BACKEND_TIMEOUT)
        r.raise_for_status()
        payload = r.json()
    except (requests.RequestException, ValueError) as e:
        logger.exception("Backend scan failed for %s", url)
        return jsonify({'error': f'backend scan failed: {e}'}), 502

    view = build_view(payload)
    if _wants_json():
        return jsonify(view)
    return render_template('index.html', view=view, url=url)


if __name__ == '__main__':
    port = int(os.getenv('PORT', '8080'))
    app.run(host='0.0.0.0', port=port)

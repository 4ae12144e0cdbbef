"""
Flask REST API for the DeskCalc Web Portal
Runs calculator sessions server-side; clients post tokens and render the state
"""
import logging
import threading
import uuid
from collections import OrderedDict

from flask import Flask, jsonify, request
from flask_cors import CORS

import config
from calculator import Calculator

logger = logging.getLogger(__name__)

app = Flask(__name__)
CORS(app)  # Enable CORS for all routes


class SessionStore:
    """Calculator sessions keyed by id, oldest evicted past max_sessions"""

    def __init__(self, max_sessions=config.MAX_WEB_SESSIONS):
        self.max_sessions = max_sessions
        self._sessions = OrderedDict()
        self._lock = threading.Lock()

    def create(self):
        session_id = uuid.uuid4().hex
        with self._lock:
            self._sessions[session_id] = Calculator()
            while len(self._sessions) > self.max_sessions:
                evicted, _ = self._sessions.popitem(last=False)
                logger.info("Evicted calculator session %s", evicted)
        return session_id

    def get(self, session_id):
        with self._lock:
            calc = self._sessions.get(session_id)
            if calc is not None:
                self._sessions.move_to_end(session_id)
            return calc

    def feed(self, session_id, tokens):
        """Process tokens on one session; returns its snapshot or None"""
        with self._lock:
            calc = self._sessions.get(session_id)
            if calc is None:
                return None
            self._sessions.move_to_end(session_id)
            calc.feed(tokens)
            return calc.snapshot()

    def delete(self, session_id):
        with self._lock:
            return self._sessions.pop(session_id, None) is not None

    def __len__(self):
        return len(self._sessions)


sessions = SessionStore()


def _not_found(session_id):
    return jsonify({'success': False, 'error': f"Unknown session: {session_id}"}), 404


@app.route('/api')
def api_info():
    """API information page"""
    return f"""
    <html>
    <head><title>{config.APP_NAME} API</title></head>
    <body style="font-family: Arial; padding: 40px; background: #1a1a2e; color: white;">
        <h1>{config.APP_NAME} API Server</h1>
        <h2>Available Endpoints:</h2>
        <ul>
            <li>POST /api/sessions - Start a calculator session</li>
            <li>GET /api/sessions/&lt;id&gt; - Current display, top line and memory flag</li>
            <li>POST /api/sessions/&lt;id&gt;/tokens - Send {{"token": "7"}} or {{"tokens": ["1", "+", "2", "="]}}</li>
            <li>DELETE /api/sessions/&lt;id&gt; - End a session</li>
        </ul>
    </body>
    </html>
    """


@app.route('/api/sessions', methods=['POST'])
def create_session():
    """Start a new calculator session"""
    try:
        session_id = sessions.create()
        return jsonify({
            'success': True,
            'data': {'id': session_id, 'state': sessions.get(session_id).snapshot()}
        }), 201
    except Exception as e:
        logger.exception("Failed to create session")
        return jsonify({'success': False, 'error': str(e)}), 500


@app.route('/api/sessions/<session_id>')
def get_session(session_id):
    """Get the display state of a session"""
    calc = sessions.get(session_id)
    if calc is None:
        return _not_found(session_id)
    return jsonify({'success': True, 'data': calc.snapshot()})


@app.route('/api/sessions/<session_id>/tokens', methods=['POST'])
def post_tokens(session_id):
    """Feed one token or a list of tokens into a session"""
    payload = request.get_json(silent=True)
    if not isinstance(payload, dict):
        return jsonify({'success': False, 'error': "Expected a JSON object"}), 400

    if 'tokens' in payload:
        tokens = payload['tokens']
    elif 'token' in payload:
        tokens = [payload['token']]
    else:
        return jsonify({'success': False, 'error': "Missing 'token' or 'tokens'"}), 400

    if not isinstance(tokens, list) or not all(isinstance(t, str) for t in tokens):
        return jsonify({'success': False, 'error': "Tokens must be strings"}), 400

    try:
        state = sessions.feed(session_id, tokens)
    except Exception as e:
        logger.exception("Failed to process tokens for session %s", session_id)
        return jsonify({'success': False, 'error': str(e)}), 500

    if state is None:
        return _not_found(session_id)
    return jsonify({'success': True, 'data': state})


@app.route('/api/sessions/<session_id>', methods=['DELETE'])
def delete_session(session_id):
    """End a session"""
    if not sessions.delete(session_id):
        return _not_found(session_id)
    return jsonify({'success': True, 'data': {'id': session_id}})


if __name__ == '__main__':
    config.setup_logging()
    print("\n" + "="*60)
    print(f"{config.APP_NAME} Web Portal API Server")
    print("="*60)
    print(f"Server starting on http://{config.WEB_HOST}:{config.WEB_PORT}")
    print(f"Access from this device: http://localhost:{config.WEB_PORT}/api")
    if config.WEB_HOST == '0.0.0.0':
        print(f"Access from network: http://<your-ip>:{config.WEB_PORT}/api")
    print("="*60 + "\n")

    app.run(host=config.WEB_HOST, port=config.WEB_PORT, debug=False)

"""
Flask Web GUI for the thermostat simulator.
Provides the live dashboard and a REST API for monitoring and control.
"""
import os
import logging
import threading
from functools import wraps
from typing import Dict, Optional
from flask import Flask, render_template, jsonify, request, redirect, url_for, flash
from flask_cors import CORS
from flask_login import LoginManager, UserMixin, login_user, logout_user, login_required, current_user
from werkzeug.security import generate_password_hash, check_password_hash
from werkzeug.serving import make_server

from thermosim.climate import MONTHLY_BASELINES
from thermosim.models.controls import ThermostatControls
from thermosim.models.scheduler import SimulationRunner
from thermosim.presenters import DashboardPresenter

logger = logging.getLogger("WebGUI")

OPERATOR = "admin"
OBSERVER = "viewer"

# username -> (role, password env var, fallback password)
DEFAULT_ACCOUNTS = {
    "admin": (OPERATOR, "ADMIN_PASSWORD", "admin123"),
    "viewer": (OBSERVER, "VIEWER_PASSWORD", "viewer123"),
}


class User(UserMixin):
    """Dashboard account. Operators may change controls; observers only watch."""

    def __init__(self, username: str, password: str, role: str = OBSERVER):
        self.id = username
        self.username = username
        self.role = role
        self._hash = generate_password_hash(password)

    @property
    def is_operator(self) -> bool:
        return self.role == OPERATOR

    def verify(self, password: str) -> bool:
        return check_password_hash(self._hash, password)


class UserStore:
    """In-memory accounts, passwords taken from the environment when set."""

    def __init__(self, environ: Dict[str, str] = None):
        env = os.environ if environ is None else environ
        self._users: Dict[str, User] = {}
        for username, (role, env_var, fallback) in DEFAULT_ACCOUNTS.items():
            self._users[username] = User(username, env.get(env_var, fallback), role)

    def get(self, username: str) -> Optional[User]:
        return self._users.get(username)

    def authenticate(self, username: str, password: str) -> Optional[User]:
        user = self._users.get(username)
        if user is None or not user.verify(password):
            return None
        return user


def _parse_bool(value):
    """Accept JSON booleans and the usual form spellings."""
    if isinstance(value, bool):
        return value
    text = value.strip().lower() if isinstance(value, str) else None
    if text in ('true', '1', 'on', 'yes'):
        return True
    if text in ('false', '0', 'off', 'no'):
        return False
    raise ValueError(f"Expected true or false, got {value!r}")


def _requires(operator: bool = False):
    """Guard for API routes: JSON 401/403 instead of the login redirect."""
    def decorator(f):
        @wraps(f)
        def guarded(*args, **kwargs):
            if not current_user.is_authenticated:
                return jsonify({'error': 'Login required'}), 401
            if operator and not current_user.is_operator:
                return jsonify({'error': 'Only an admin can do that'}), 403
            return f(*args, **kwargs)
        return guarded
    return decorator


CONTROL_KEYS = ('desired_temp', 'window_open', 'tick_interval_ms', 'month', 'alert_sound')


def create_app(runner: SimulationRunner, controls: ThermostatControls,
               dashboard: DashboardPresenter) -> Flask:
    """
    Factory function to create Flask app with injected simulation objects (DIP).
    """
    app = Flask(__name__, template_folder='templates')
    app.config['SECRET_KEY'] = os.environ.get("SECRET_KEY", "thermosim-dev-key")
    CORS(app, supports_credentials=True)

    users = UserStore()
    app.extensions['thermosim'] = {
        'runner': runner,
        'controls': controls,
        'dashboard': dashboard,
        'users': users,
    }

    login_manager = LoginManager(app)
    login_manager.login_view = 'login'
    login_manager.login_message = 'Log in to see the thermostat.'
    login_manager.user_loader(users.get)

    # --- Pages ---

    @app.route('/login', methods=['GET', 'POST'])
    def login():
        if current_user.is_authenticated:
            return redirect(url_for('index'))
        if request.method == 'POST':
            username = request.form.get('username', '').strip()
            user = users.authenticate(username, request.form.get('password', ''))
            if user is None:
                logger.warning(f"Rejected login for '{username}'")
                flash('Wrong username or password', 'error')
            else:
                login_user(user, remember=bool(request.form.get('remember')))
                logger.info(f"{user.role} '{username}' logged in")
                return redirect(request.args.get('next') or url_for('index'))
        return render_template('login.html')

    @app.route('/logout')
    @login_required
    def logout():
        logger.info(f"'{current_user.username}' logged out")
        logout_user()
        flash('Logged out.', 'info')
        return redirect(url_for('login'))

    @app.route('/')
    @login_required
    def index():
        """Render main dashboard."""
        return render_template('index.html', user=current_user,
                               months=[name for name, _ in MONTHLY_BASELINES],
                               controls=controls.get_all())

    # --- JSON API ---

    @app.route('/api/status')
    @_requires()
    def get_status():
        """Live values, bill, runtime and warnings."""
        status = dashboard.status()
        status['running'] = runner.is_running
        status['engine_state'] = runner.engine.state.value
        status['controls'] = controls.as_dict()
        return jsonify(status)

    @app.route('/api/history')
    @_requires()
    def get_history():
        """Bounded time series for the graph (power in kW)."""
        history = dashboard.history()
        history['window'] = dashboard.series.maxlen
        return jsonify(history)

    @app.route('/api/controls', methods=['GET'])
    @_requires()
    def get_controls():
        return jsonify(controls.get_all())

    @app.route('/api/controls', methods=['POST'])
    @_requires(operator=True)
    def update_controls():
        """
        Update one or more controls.

        Request body: any of desired_temp, window_open, tick_interval_ms, month, alert_sound
        """
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            return jsonify({'error': 'JSON object required'}), 400

        unknown = [k for k in data if k not in CONTROL_KEYS]
        if unknown:
            return jsonify({'error': f"Unknown controls: {', '.join(sorted(unknown))}"}), 400

        changes = dict(data)
        try:
            for key in ('window_open', 'alert_sound'):
                if key in changes:
                    changes[key] = _parse_bool(changes[key])
            state = controls.update(**changes)
        except ValueError as e:
            logger.warning(f"Rejected control update {data}: {e}")
            return jsonify({'error': str(e)}), 400

        logger.info(f"{current_user.username} updated controls: {changes}")
        return jsonify({'success': True, 'controls': controls.as_dict(state)})

    @app.route('/api/months')
    @_requires()
    def get_months():
        return jsonify([
            {'name': name, 'temperature': b.temperature, 'humidity': b.humidity}
            for name, b in MONTHLY_BASELINES
        ])

    @app.route('/api/actuators')
    @_requires()
    def get_actuators():
        return jsonify(runner.engine.actuators.describe())

    @app.route('/api/simulation/start', methods=['POST'])
    @_requires(operator=True)
    def start_simulation():
        started = runner.start()
        logger.info(f"{current_user.username} started the simulation")
        return jsonify({'success': True, 'running': runner.is_running, 'changed': started})

    @app.route('/api/simulation/stop', methods=['POST'])
    @_requires(operator=True)
    def stop_simulation():
        stopped = runner.stop()
        logger.info(f"{current_user.username} stopped the simulation")
        return jsonify({'success': True, 'running': runner.is_running, 'changed': stopped})

    @app.route('/api/simulation/reset', methods=['POST'])
    @_requires(operator=True)
    def reset_simulation():
        runner.reset()
        logger.info(f"{current_user.username} reset the simulation")
        return jsonify({'success': True, 'running': runner.is_running})

    @app.route('/api/user')
    @_requires()
    def get_current_user():
        """Get current user info."""
        return jsonify({
            'username': current_user.username,
            'role': current_user.role
        })

    return app


class WebServer:
    """
    Serves the dashboard from a daemon thread (SRP - serving only).
    """

    def __init__(self, runner: SimulationRunner, controls: ThermostatControls,
                 dashboard: DashboardPresenter, host: str = "0.0.0.0", port: int = 8080):
        self._app = create_app(runner, controls, dashboard)
        self._host = host
        self._port = port
        self._server = None
        self._thread = None

    @property
    def app(self) -> Flask:
        return self._app

    def start(self) -> None:
        self._server = make_server(self._host, self._port, self._app, threaded=True)
        self._thread = threading.Thread(target=self._server.serve_forever,
                                        name="thermosim-web", daemon=True)
        self._thread.start()
        logger.info(f"Dashboard listening on http://{self._host}:{self._port}")

    def stop(self) -> None:
        if self._server is None:
            return
        self._server.shutdown()
        self._server = None
        logger.info("Dashboard stopped")

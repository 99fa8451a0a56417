"""GeoAttend - Application Factory."""
import logging
import os
from flask import Flask, jsonify
from flask_sqlalchemy import SQLAlchemy
from flask_migrate import Migrate
from flask_jwt_extended import JWTManager
from flask_cors import CORS
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address

# Initialize extensions
db = SQLAlchemy()
migrate = Migrate()
jwt = JWTManager()
limiter = Limiter(
    key_func=get_remote_address,
    default_limits=["200 per day", "50 per hour"]
)

def create_app(config_name: str = None) -> Flask:
    """Application factory pattern."""
    app = Flask(__name__)

    # Load configuration
    from geoattend.config import get_config
    config_class = get_config(config_name)
    app.config.from_object(config_class)

    # Initialize extensions
    db.init_app(app)
    migrate.init_app(app, db)
    jwt.init_app(app)
    limiter.init_app(app)

    # Configure CORS
    CORS(app, origins=app.config.get('CORS_ORIGINS', ["*"]))

    # Setup logging
    setup_logging(app)

    # Device-session registry over the configured store
    setup_device_sessions(app)

    # Register blueprints
    register_blueprints(app)

    # Register error handlers
    register_error_handlers(app)

    # Setup database
    setup_database(app)

    # Add CLI commands
    register_commands(app)

    @app.route('/health')
    def health_check():
        return jsonify({
            'status': 'healthy',
            'service': 'GeoAttend',
            'version': '1.0.0'
        })

    return app

def register_blueprints(app: Flask) -> None:
    """Register all application blueprints."""
    from flask_swagger_ui import get_swaggerui_blueprint
    from geoattend.api.auth import auth_bp
    from geoattend.api.courses import courses_bp
    from geoattend.api.windows import windows_bp
    from geoattend.api.attendance import attendance_bp
    from geoattend.api.students import students_bp
    from geoattend.utils.swagger import SWAGGER_URL, API_URL, generate_swagger_spec

    app.register_blueprint(auth_bp, url_prefix='/api/auth')
    app.register_blueprint(courses_bp, url_prefix='/api/courses')
    app.register_blueprint(windows_bp, url_prefix='/api/windows')
    app.register_blueprint(attendance_bp, url_prefix='/api/attendance')
    app.register_blueprint(students_bp, url_prefix='/api/students')

    @app.route(API_URL)
    def swagger_spec():
        """Serve Swagger/OpenAPI specification."""
        return jsonify(generate_swagger_spec())

    swaggerui_bp = get_swaggerui_blueprint(
        SWAGGER_URL,
        API_URL,
        config={'app_name': "GeoAttend API"}
    )
    app.register_blueprint(swaggerui_bp, url_prefix=SWAGGER_URL)

def register_error_handlers(app: Flask) -> None:
    """Register error handlers."""
    from sqlalchemy.exc import SQLAlchemyError
    from werkzeug.exceptions import HTTPException
    from geoattend.utils.errors import AttendanceError
    from geoattend.utils.helpers import handle_error, error_response

    @app.errorhandler(AttendanceError)
    def attendance_error(error):
        return error_response(error.message, error.status_code, **error.details)

    @app.errorhandler(SQLAlchemyError)
    def database_error(error):
        db.session.rollback()
        app.logger.exception('Database failure: %s', error)
        return error_response('Internal server error', 500)

    @app.errorhandler(400)
    def bad_request(error):
        return handle_error(error, 400)

    @app.errorhandler(401)
    def unauthorized(error):
        return handle_error(error, 401)

    @app.errorhandler(403)
    def forbidden(error):
        return handle_error(error, 403)

    @app.errorhandler(404)
    def not_found(error):
        return handle_error(error, 404)

    @app.errorhandler(500)
    def internal_error(error):
        db.session.rollback()
        return error_response('Internal server error', 500)

    @app.errorhandler(HTTPException)
    def handle_exception(e):
        return handle_error(e, e.code)

    # JWT error handlers
    @jwt.expired_token_loader
    def expired_token_callback(jwt_header, jwt_payload):
        return error_response('Token has expired', 401)

    @jwt.invalid_token_loader
    def invalid_token_callback(error):
        return error_response('Invalid token', 401)

    @jwt.unauthorized_loader
    def missing_token_callback(error):
        return error_response('Authorization token required', 401)

def setup_logging(app: Flask) -> None:
    """Setup application logging."""
    level = getattr(logging, app.config.get('LOG_LEVEL', 'INFO'), logging.INFO)

    if not app.debug and not app.testing:
        log_file = app.config.get('LOG_FILE', 'logs/app.log')
        log_dir = os.path.dirname(log_file)
        if log_dir and not os.path.exists(log_dir):
            os.makedirs(log_dir)

        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(logging.Formatter(
            '%(asctime)s %(levelname)s: %(message)s [in %(pathname)s:%(lineno)d]'
        ))
        file_handler.setLevel(level)
        app.logger.addHandler(file_handler)

        app.logger.setLevel(level)
        app.logger.info('GeoAttend startup')

def setup_device_sessions(app: Flask) -> None:
    """Build the device-session registry over the configured store."""
    from geoattend.services.device_session_service import (
        DeviceSessionRegistry, SQLDeviceSessionStore, RedisDeviceSessionStore
    )

    backend = app.config.get('DEVICE_SESSION_STORE', 'sql')

    if backend == 'redis':
        import redis

        redis_url = app.config.get('REDIS_URL')
        if not redis_url:
            raise RuntimeError('DEVICE_SESSION_STORE=redis requires REDIS_URL')

        client = redis.Redis.from_url(redis_url, decode_responses=True)
        store = RedisDeviceSessionStore(
            client,
            prefix=app.config.get('DEVICE_SESSION_KEY_PREFIX', 'device_session')
        )
    elif backend == 'sql':
        store = SQLDeviceSessionStore()
    else:
        raise RuntimeError(f'Unknown DEVICE_SESSION_STORE: {backend}')

    app.extensions['device_sessions'] = DeviceSessionRegistry(store)

def setup_database(app: Flask) -> None:
    """Setup database connections."""
    with app.app_context():
        # Import all models so metadata knows every table
        from geoattend.models import (
            Student, Lecturer, Course, DeviceSession,
            AttendanceWindow, AttendanceRecord
        )

def register_commands(app: Flask) -> None:
    """Register CLI commands."""
    import click

    @app.cli.command('init-db')
    @click.option('--drop', is_flag=True, help='Drop existing tables')
    def init_db(drop):
        """Initialize the database."""
        if drop:
            db.drop_all()
            click.echo('Dropped all tables.')

        db.create_all()
        click.echo('Created all tables.')

    @app.cli.command('seed-db')
    def seed_db():
        """Seed database with demo lecturer, courses and students."""
        from geoattend.services.seed_service import SeedService

        if SeedService.seed_all():
            click.echo('Database seeded successfully!')
        else:
            click.echo('Database already seeded, nothing to do.')

    @app.cli.command('create-lecturer')
    def create_lecturer():
        """Create lecturer account."""
        from geoattend.models.lecturer import Lecturer
        from geoattend.services.password_service import PasswordService

        name = click.prompt('Full name').strip()
        username = click.prompt('Username').strip()
        password = click.prompt('Password', hide_input=True, confirmation_prompt=True)

        min_length = app.config.get('MIN_PASSWORD_LENGTH', 6)
        if len(password) < min_length:
            raise click.ClickException(f'Password must be at least {min_length} characters')

        if Lecturer.query.filter_by(username=username).first():
            raise click.ClickException(f"Username '{username}' already exists")

        lecturer = Lecturer(
            name=name,
            username=username,
            password_hash=PasswordService.hash(password)
        )
        lecturer.save()
        click.echo(f"Lecturer '{lecturer.name}' added with ID: {lecturer.id}")

    @app.cli.command('import-students')
    @click.argument('path', type=click.Path(exists=True, dir_okay=False))
    def import_students(path):
        """Import students from a CSV file with index_number and name columns."""
        import pandas as pd
        from geoattend.services.student_service import StudentService

        df = pd.read_csv(path, dtype=str).fillna('')
        summary = StudentService.import_students(df.to_dict('records'))

        click.echo(
            f"Added {summary['added']}, updated {summary['updated']}, "
            f"skipped {summary['skipped']}"
        )
        for error in summary['errors']:
            click.echo(f'  {error}', err=True)

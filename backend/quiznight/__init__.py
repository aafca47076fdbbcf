from flask import Flask, jsonify
from flask_sqlalchemy import SQLAlchemy
from flask_bcrypt import Bcrypt
from flask_login import LoginManager
from flask_cors import CORS
from flask_migrate import Migrate
from flask_socketio import SocketIO
import click
from config import Config

db = SQLAlchemy()
bcrypt = Bcrypt()
login_manager = LoginManager()
migrate = Migrate()
socketio = SocketIO(async_mode=None)

REGISTRY_KEY = 'quiznight.sessions'
QUESTION_SOURCE_KEY = 'quiznight.questions'


def create_app(config_class=Config, question_source=None):
    flask_app = Flask(__name__)
    flask_app.config.from_object(config_class)
    allowed_origins = flask_app.config.get('CORS_ORIGINS') or []

    db.init_app(flask_app)
    bcrypt.init_app(flask_app)
    login_manager.init_app(flask_app)
    migrate.init_app(flask_app, db)
    CORS(flask_app, supports_credentials=True, origins=allowed_origins)

    # Initialize Socket.IO after app is created
    socketio.init_app(flask_app, cors_allowed_origins=allowed_origins)

    # Live sessions belong to this app instance and die with the process
    from quiznight.services.live import SessionRegistry, SqlQuestionSource
    flask_app.extensions[REGISTRY_KEY] = SessionRegistry(
        code_length=int(flask_app.config.get('JOIN_CODE_LENGTH', 6)),
    )
    flask_app.extensions[QUESTION_SOURCE_KEY] = question_source or SqlQuestionSource()

    register_error_handlers(flask_app)

    from quiznight.main import main
    flask_app.register_blueprint(main)

    from quiznight.api.sessions import sessions
    flask_app.register_blueprint(sessions, url_prefix='/api/sessions')

    from quiznight.api.quizzes import quizzes
    flask_app.register_blueprint(quizzes, url_prefix='/api/quizzes')

    from quiznight.socketio_events import register_socketio_handlers
    register_socketio_handlers(testing=flask_app.config.get('TESTING', False))

    # Flask-Login user loader
    from quiznight.models import Admin

    @login_manager.user_loader
    def load_user(user_id):
        return db.session.get(Admin, int(user_id))

    @login_manager.unauthorized_handler
    def unauthorized():
        from quiznight.services.live import Unauthorized
        raise Unauthorized('You must be logged in as an admin')

    @click.command('db-reset')
    def db_reset_command():
        """Drops, recreates, and seeds the database."""
        from quiznight.seed import seed_demo_data
        with flask_app.app_context():
            db.drop_all()
            db.create_all()
            quiz = seed_demo_data()
            print(f'Database has been reset and seeded! Demo quiz id={quiz.id}')

    @click.command('create-admin')
    @click.argument('username')
    @click.argument('password')
    def create_admin_command(username, password):
        """Creates an admin account for driving live sessions."""
        with flask_app.app_context():
            if Admin.query.filter_by(username=username).first():
                raise click.ClickException(f'Admin {username} already exists')
            admin = Admin(username=username)
            admin.set_password(password)
            db.session.add(admin)
            db.session.commit()
            print(f'Admin {username} created')

    flask_app.cli.add_command(db_reset_command)
    flask_app.cli.add_command(create_admin_command)

    return flask_app


def register_error_handlers(flask_app):
    from quiznight.services.live import LiveGameError

    @flask_app.errorhandler(LiveGameError)
    def handle_live_game_error(exc):
        flask_app.logger.info(f"[error] {type(exc).__name__}: {exc.message}")
        return jsonify(exc.to_dict()), exc.status_code

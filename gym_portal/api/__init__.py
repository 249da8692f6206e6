# Routes package


def register_blueprints(app):
    from gym_portal.api.main import main_bp
    from gym_portal.api.auth import auth_bp
    from gym_portal.api.members import members_bp
    from gym_portal.api.admin import admin_bp

    app.register_blueprint(main_bp)
    app.register_blueprint(auth_bp)
    app.register_blueprint(members_bp)
    app.register_blueprint(admin_bp)

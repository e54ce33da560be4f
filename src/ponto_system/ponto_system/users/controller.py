from __future__ import annotations

from datetime import timedelta

from flask import Flask, jsonify, request, session

from ..common.session import current_session_user, json_error, login_required, store_session_user
from ..core.constants import DEFAULT_SESSION_DAYS
from ..core.exceptions import AuthenticationError, ExternalServiceError, NotFoundError, ValidationError
from ..container import Container
from .profile_editor import ProfileEditor

# URL name -> User attribute
_PROFILE_FIELD_ALIASES = {
    "nome": "full_name",
    "empresa": "company",
    "cargo": "role",
}

_EDITOR_SESSION_KEY = "profile_edit"


def register(app: Flask, container: Container) -> None:
    app.permanent_session_lifetime = timedelta(days=int(app.config.get("SESSION_DAYS", DEFAULT_SESSION_DAYS)))

    @app.route("/api/cadastro", methods=["POST"], endpoint="api_register")
    def api_register():
        data = request.get_json(silent=True) or {}
        try:
            user = container.user_service.register(
                full_name=data.get("nomeCompleto", ""),
                email=data.get("email", ""),
                company=data.get("empresa", ""),
                role=data.get("cargo", ""),
                password=data.get("senha", ""),
                confirm_password=data.get("confirmarSenha", ""),
            )
        except ValidationError as e:
            return json_error(str(e), 400)
        except ExternalServiceError as e:
            return json_error(str(e), 503)
        except Exception:
            app.logger.exception("registration failed")
            return json_error("Erro ao cadastrar. Tente novamente.", 500)

        return jsonify({"success": True, "message": "Cadastro realizado com sucesso!", "usuario": user.to_public_dict()}), 201

    @app.route("/api/login", methods=["POST"], endpoint="api_login")
    def api_login():
        data = request.get_json(silent=True) or {}
        try:
            s_user = container.auth_service.authenticate(data.get("email", ""), data.get("senha", ""))
        except AuthenticationError as e:
            return json_error(str(e), 401)
        except ExternalServiceError as e:
            return json_error(str(e), 503)
        except Exception:
            app.logger.exception("login failed")
            return json_error("Erro interno ao fazer login", 500)

        session.clear()
        session.permanent = bool(data.get("lembrar"))
        store_session_user(s_user)
        return jsonify(
            {
                "success": True,
                "message": "Login realizado com sucesso!",
                "usuario": {"id": s_user.user_id, "nome": s_user.full_name, "email": s_user.email},
            }
        )

    @app.route("/api/logout", methods=["POST"], endpoint="api_logout")
    def api_logout():
        session.clear()
        return jsonify({"success": True, "message": "Sessão encerrada"})

    @app.route("/api/me", methods=["GET"], endpoint="api_me")
    @login_required
    def api_me():
        s_user = current_session_user()
        try:
            user = container.user_service.get_profile(s_user.user_id)
        except NotFoundError as e:
            session.clear()
            return json_error(str(e), 401)

        editor = ProfileEditor.for_user(user, session.get(_EDITOR_SESSION_KEY))
        return jsonify({"success": True, "usuario": user.to_public_dict(), "perfil": editor.to_dict()})

    @app.route("/api/alterar-senha", methods=["PUT"], endpoint="api_change_password")
    @login_required
    def api_change_password():
        data = request.get_json(silent=True) or {}
        try:
            container.user_service.change_password(
                current_session_user().user_id,
                current_password=data.get("senhaAtual", ""),
                new_password=data.get("novaSenha", ""),
                confirm_password=data.get("confirmarSenha", ""),
            )
        except ValidationError as e:
            return json_error(str(e), 400)
        except NotFoundError as e:
            return json_error(str(e), 404)
        return jsonify({"success": True, "message": "Senha alterada com sucesso"})

    def _load_editor(field_alias: str):
        field_name = _PROFILE_FIELD_ALIASES.get(field_alias)
        if not field_name:
            raise NotFoundError("Campo de perfil desconhecido")
        user = container.user_service.get_profile(current_session_user().user_id)
        editor = ProfileEditor.for_user(user, session.get(_EDITOR_SESSION_KEY))
        return editor, editor.field(field_name)

    def _editor_response(editor: ProfileEditor, field_alias: str):
        session[_EDITOR_SESSION_KEY] = editor.to_state()
        field = editor.field(_PROFILE_FIELD_ALIASES[field_alias])
        return jsonify({"success": True, "campo": field.to_dict()})

    @app.route("/api/perfil/<campo>/editar", methods=["POST"], endpoint="api_profile_start_edit")
    @login_required
    def api_profile_start_edit(campo: str):
        try:
            editor, field = _load_editor(campo)
            field.start_edit()
        except NotFoundError as e:
            return json_error(str(e), 404)
        except ValidationError as e:
            return json_error(str(e), 409)
        return _editor_response(editor, campo)

    @app.route("/api/perfil/<campo>/salvar", methods=["POST"], endpoint="api_profile_save")
    @login_required
    def api_profile_save(campo: str):
        data = request.get_json(silent=True) or {}
        user_id = current_session_user().user_id
        try:
            editor, field = _load_editor(campo)

            def persist(value: str) -> str:
                user = container.user_service.update_profile_field(user_id, field=field.name, value=value)
                return getattr(user, field.name)

            field.save(data.get("valor", ""), persist)
        except NotFoundError as e:
            return json_error(str(e), 404)
        except ValidationError as e:
            return json_error(str(e), 400)

        if field.name == "full_name":
            session["name"] = field.value
        elif field.name == "company":
            session["company"] = field.value
        return _editor_response(editor, campo)

    @app.route("/api/perfil/<campo>/cancelar", methods=["POST"], endpoint="api_profile_cancel")
    @login_required
    def api_profile_cancel(campo: str):
        try:
            editor, field = _load_editor(campo)
            field.cancel()
        except NotFoundError as e:
            return json_error(str(e), 404)
        except ValidationError as e:
            return json_error(str(e), 409)
        return _editor_response(editor, campo)

    @app.route("/api/conta", methods=["DELETE"], endpoint="api_deactivate_account")
    @login_required
    def api_deactivate_account():
        data = request.get_json(silent=True) or {}
        try:
            container.user_service.deactivate_account(current_session_user().user_id, password=data.get("senha", ""))
        except ValidationError as e:
            return json_error(str(e), 400)
        except NotFoundError as e:
            return json_error(str(e), 404)
        session.clear()
        return jsonify({"success": True, "message": "Conta desativada"})

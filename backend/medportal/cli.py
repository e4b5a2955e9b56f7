import click

from . import bcrypt
from .errors import Conflict
from .schemas import InsertUser
from .seed import seed_doctors


def register_commands(app, storage):
    @app.cli.command("seed")
    def seed():
        """Insere os médicos padrão se ainda não houver nenhum."""
        created = seed_doctors(storage)
        click.echo(f"{created} médico(s) criado(s).")

    @app.cli.command("create-admin")
    @click.argument("username")
    @click.option("--name", required=True)
    @click.option("--email", required=True)
    @click.option("--mobile", default=None)
    @click.password_option()
    def create_admin(username, name, email, mobile, password):
        """Cria um usuário administrador."""
        hashed_pw = bcrypt.generate_password_hash(password).decode("utf-8")
        try:
            user = storage.create_user(InsertUser(
                username=username,
                password=hashed_pw,
                role="admin",
                name=name,
                email=email,
                mobile=mobile,
            ))
        except Conflict as e:
            raise click.ClickException(e.message)
        click.echo(f"Admin {user.username} criado (id {user.id}).")

from medportal import create_app

app = create_app()


if __name__ == '__main__':
    # Inicializa o servidor Flask (debug conforme a configuração)
    app.run(debug=app.config.get("DEBUG", False))

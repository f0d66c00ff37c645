from tictactoe import create_app, socketio

app = create_app()

if __name__ == '__main__':
    # Use SocketIO server to enable websockets; DEBUG=1 for the dev server
    debug = app.config['DEBUG']
    socketio.run(app, host=app.config['HOST'], port=app.config['PORT'], debug=debug, allow_unsafe_werkzeug=debug)

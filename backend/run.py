from quiznight import create_app, socketio

app = create_app()

if __name__ == '__main__':
    # Use SocketIO server so live sessions can push events over websockets
    socketio.run(app, debug=True)

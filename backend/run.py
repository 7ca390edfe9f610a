from pong import create_app, socketio

app = create_app()

if __name__ == '__main__':
    # Socket.IO server so websocket clients can connect in dev
    socketio.run(app, host='0.0.0.0', port=app.config['PORT'], debug=True, allow_unsafe_werkzeug=True)

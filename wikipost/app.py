from flask import Flask, current_app, redirect, render_template, request, url_for
import logging
import os

from wikipost.posts import POSTS_DIR, InvalidTitle, Post, PostError, PostStore

HOST = '0.0.0.0'
PORT = 8080
VIEWS_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), 'views')


def get_store():
    return current_app.extensions['posts']


def view_post(title):
    if not title:
        return "Dude, try entering a blog post title"

    try:
        post = get_store().load(title)
    except PostError:
        return redirect(url_for('edit', title=title))

    return render_template('view.html', post=post)


def edit_post(title):
    if not title:
        return "Error: Missing post title"

    try:
        post = get_store().load(title)
    except PostError:
        post = Post(title=title)

    return render_template('edit.html', post=post)


def save_post(title):
    if not title:
        return "Failed to save post, missing title."

    post = Post(title=title, body=request.form.get('body', '').encode('utf-8'))

    try:
        get_store().save(post)
    except PostError as e:
        return str(e), 500

    return redirect(url_for('view', title=title))


def oops(title):
    return render_template('500.html')


def invalid_title(e):
    logging.warning(f"Rejected title in {request.path}: {e}")
    return "Invalid post title", 400


# Literal prefixes, first match wins
ROUTES = (
    ('/view/', 'view', view_post, ['GET']),
    ('/edit/', 'edit', edit_post, ['GET']),
    ('/save/', 'save', save_post, ['POST']),
    ('/oops/', 'oops', oops, ['GET']),
)


def register_routes(app, routes=ROUTES):
    for prefix, endpoint, handler, methods in routes:
        app.add_url_rule(prefix, endpoint, handler, methods=methods, defaults={'title': ''})
        app.add_url_rule(prefix + '<title>', endpoint, handler, methods=methods)


def create_app(test_config=None):
    app = Flask(__name__, template_folder=VIEWS_DIR)
    app.config.from_mapping(POSTS_DIR=POSTS_DIR)
    if test_config is not None:
        app.config.from_mapping(test_config)

    app.extensions['posts'] = PostStore(app.config['POSTS_DIR'])
    app.register_error_handler(InvalidTitle, invalid_title)
    register_routes(app)
    return app


def main():
    logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')

    app = create_app()
    os.makedirs(app.config['POSTS_DIR'], exist_ok=True)
    logging.info(f"Serving posts from {app.config['POSTS_DIR']} on port {PORT}")
    app.run(host=HOST, port=PORT)


if __name__ == '__main__':
    main()

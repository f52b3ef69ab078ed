"""Visit http://127.0.0.1:3001/?username=Alice&bookname=HarryPotter"""
from werkzeug.serving import run_simple

from wsgiquery import Request, query_parser


@query_parser()
def application(environ, start_response):
    request = Request(environ)
    user_name = request.query("username")
    book_name = request.query("bookname")

    body = f"User: {user_name}, Book: {book_name}".encode("utf-8")
    start_response("200 OK", [
        ("Content-Type", "text/plain; charset=utf-8"),
        ("Content-Length", str(len(body))),
    ])
    return [body]


if __name__ == "__main__":
    run_simple("127.0.0.1", 3001, application)

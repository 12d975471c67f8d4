import logging
from examples import load_example_config
from wsgistack import Stack

config = load_example_config('classic/config.json')
stack = Stack.from_config(config)


# Only requests carrying the right token get past this handler.
# Everything else is answered here and the rest of the stack never runs.
expected_token = "hunter2"
protected = ["/admin"]


@stack.use_func
def auth(rw, request, next):
    if request.path not in protected:
        next(rw, request)
    elif request.header("X-Token") == expected_token:
        request.context.user = "admin"
        next(rw, request)
    else:
        rw.write_header(401)
        rw.write("Invalid credentials.")


@stack.use_handler_func
def hello(rw, request):
    if request.path == "/hello":
        rw.write("Hello, World!")
    elif request.context.user:
        rw.write("Welcome back, {}.".format(request.context.user))
    else:
        rw.write_header(404)


def main():
    logging.basicConfig(level=logging.INFO, format="[wsgistack] %(message)s")
    stack.run(config["addr"], timeout=config["timeout"])

if __name__ == "__main__":
    main()

import invoke


def run(*args, **kwargs):
    kwargs.update(echo=True)
    return invoke.run(*args, **kwargs)


@invoke.task
def clean(c):
    run("rm -rf .tox/")
    run("rm -rf dist/")
    run("rm -rf wsgistack.egg-info/")
    run("find . -name '*.pyc' -delete")
    run("find . -name '__pycache__' -delete")
    run("rm -f .coverage")


@invoke.task(clean)
def build(c):
    run("pip install -e .[test]")


@invoke.task(clean)
def test(c):
    run('tox')

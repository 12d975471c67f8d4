from setuptools import setup, find_packages


setup(
    name='wsgistack',
    version='0.1.0',
    description='composable wsgi middleware stacks',
    long_description=open('README.md').read(),
    long_description_content_type='text/markdown',
    packages=find_packages(exclude=('tests', 'tests.*', 'examples', 'examples.*')),
    install_requires=['ujson'],
    extras_require={
        'test': ['pytest', 'requests'],
        'dev': ['invoke', 'tox'],
    },
    license='MIT',
    platforms='any',
    classifiers=[
        'Development Status :: 3 - Alpha',
        'Environment :: Web Environment',
        'Intended Audience :: Developers',
        'License :: OSI Approved :: MIT License',
        'Programming Language :: Python :: 3',
        'Topic :: Internet :: WWW/HTTP :: WSGI',
        'Topic :: Internet :: WWW/HTTP :: WSGI :: Middleware',
        'Topic :: Internet :: WWW/HTTP :: WSGI :: Server',
        'Topic :: Software Development :: Libraries :: Python Modules',
    ],
    keywords='wsgi middleware stack http'
)

import os

from setuptools import setup


ver_path = os.path.join(os.path.dirname(__file__), 'pngcontainer', 'version.py')
with open(ver_path) as ver_file:
    __version__ = ''
    exec(compile(ver_file.read(), ver_path, 'exec'))


requires = ['attrs>=19.2']

tests_require = ['pytest']

classifiers = [
    'Programming Language :: Python :: 3',
    'Topic :: Multimedia :: Graphics',
]

setup(
    name='pngcontainer',
    version=__version__,
    description='Chunk-level PNG parsing, validation and re-serialization',
    classifiers=classifiers,
    author='Colin Dunklau',
    author_email='colin.dunklau@gmail.com',
    url='',
    keywords='png chunk crc',
    packages=['pngcontainer', 'pngcontainer.tests'],
    include_package_data=True,
    zip_safe=False,
    python_requires='>=3.5',
    install_requires=requires,
    extras_require={'test': tests_require},
    entry_points={'console_scripts': ['pngcontainer = pngcontainer.main:main']},
)

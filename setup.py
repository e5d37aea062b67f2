
import io
import re
import setuptools

with io.open('src/docpatch/__init__.py', encoding='utf8') as fp:
  version = re.search(r"__version__\s*=\s*['\"](.*)['\"]", fp.read()).group(1)

with io.open('README.md', encoding='utf8') as fp:
  long_description = fp.read()

requirements = [
  'cleo >=2.0.0,<3.0.0',
  'databind >=4.4.0,<5.0.0',
  'importlib-metadata >=4.0.0',
  'tomli >=2.0.0,<3.0.0',
  'typing-extensions >=4.1.0',
]

setuptools.setup(
  name = 'docpatch',
  version = version,
  author = 'Niklas Rosenstein',
  author_email = 'rosensteinniklas@gmail.com',
  description = 'Keeps version numbers and archive settings of a documentation site in sync with the build.',
  long_description = long_description,
  long_description_content_type = 'text/markdown',
  license = 'MIT',
  packages = setuptools.find_packages('src', ['test', 'test.*', 'docs', 'docs.*']),
  package_dir = {'': 'src'},
  include_package_data = False,
  install_requires = requirements,
  extras_require = {
    'test': ['pytest >=7.0.0'],
  },
  python_requires = '>=3.10',
  entry_points = {
    'console_scripts': [
      'docpatch = docpatch.__main__:main',
    ],
    'docpatch.plugins.application': [
      'archive = docpatch.ext.application.archive:ArchiveCommandPlugin',
      'debug = docpatch.ext.application.debug:DebugCommandPlugin',
      'update-version = docpatch.ext.application.update_version:UpdateVersionCommandPlugin',
    ],
  }
)

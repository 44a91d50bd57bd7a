import io
import re
import setuptools

with io.open('src/slapx/__init__.py', encoding='utf8') as fp:
  version = re.search(r"__version__\s*=\s*['\"](.*)['\"]", fp.read()).group(1)

with io.open('README.md', encoding='utf8') as fp:
  long_description = fp.read()

requirements = ['cleo >=2.0.0,<3.0.0', 'databind >=4.4.0,<5.0.0', 'importlib_metadata >=4.0.0', 'tomli >=2.0.0,<3.0.0', 'typing_extensions >=4.0.0']

setuptools.setup(
  name = 'slapx',
  version = version,
  author = 'Niklas Rosenstein',
  author_email = 'rosensteinniklas@gmail.com',
  description = 'Run the scripts of your Python project, surrounded by lifecycle hooks.',
  long_description = long_description,
  long_description_content_type = 'text/markdown',
  url = 'https://github.com/NiklasRosenstein/slap',
  license = 'MIT',
  packages = setuptools.find_packages('src', ['test', 'test.*', 'docs', 'docs.*']),
  package_dir = {'': 'src'},
  include_package_data = False,
  install_requires = requirements,
  extras_require = {
    'test': ['pytest >=7.0.0'],
  },
  python_requires = '>=3.10',
  data_files = [],
  entry_points = {
    'console_scripts': [
      'slapx = slapx.__main__:main',
    ],
  }
)

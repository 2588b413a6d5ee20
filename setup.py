from setuptools import setup, find_packages
from pathlib import Path

package_name = 'console-operator'
description = (
    'Reconciliation decision logic for the OpenShift console operator: '
    'event filters, management-state dispatch and the console server '
    'configuration document.'
)
author = 'OpenShift Console Team'
license = 'Apache-2.0'
url = 'https://github.com/openshift/console-operator'
pypi_classifiers = [
    'Development Status :: 4 - Beta',
    'License :: OSI Approved :: Apache Software License',
    'Programming Language :: Python :: 3.10'
]
keywords = ['openshift', 'kubernetes', 'operator']
readme = Path(__file__).parent / 'README.rst'

# Core dependencies
install_requires = [
    'kopf>=1.35',
    'kubernetes>=28.1.0',
    'PyYAML>=6.0',
    'structlog>=23.1.0',
]

# Test dependencies
tests_require = [
    'pytest>=7.4',
]
tests_require += install_requires

# Optional dependencies (like for dev)
extras_require = {
    'test': tests_require,
    # For development environments
    'dev': tests_require,
}

setup(
    name=package_name,
    version='0.1.0',
    description=description,
    long_description=readme.read_text(),
    author=author,
    url=url,
    license=license,
    classifiers=pypi_classifiers,
    keywords=keywords,
    python_requires='>=3.10',
    package_dir={'': 'src'},
    packages=find_packages('src'),
    install_requires=install_requires,
    tests_require=tests_require,
    extras_require=extras_require,
    include_package_data=True
)

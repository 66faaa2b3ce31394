from setuptools import setup, find_packages


requirements = [  # pip
    'numpy',
    'scipy',
    'configobj',
]

test_requirements = [
    'pytest',
]

packages = find_packages(exclude=('doc', 'tests*'))
setup(
    name='GreyMorph',
    version='1.0.0',
    description='Grayscale morphology of N-dimensional images with the anchor algorithm and parallel region processing',
    install_requires=requirements,
    extras_require={'test': test_requirements},
    packages=packages,
    python_requires='>=3.9',
    url='',
    license='GPLv3',
    author='GreyMorph developers',
    author_email='',
    include_package_data=True,
    package_data={'GreyMorph.config': ['*.cfg']},
    zip_safe=False
)

from setuptools import find_packages
from setuptools import setup

setup(
    author='Jeffrey Finkelstein',
    author_email='jeffrey.finkelstein@gmail.com',
    #classifiers=[],
    description='Chi-squared Bayesian classifier for weighted token streams',
    #download_url='',
    extras_require={'test': ['pytest']},
    install_requires=['blinker'],
    #include_package_data=True,
    #keywords=[],
    #license='',
    #long_description='',
    name='osbclassifier',
    platforms='any',
    packages=find_packages(exclude=['tests', 'tests.*']),
    url='http://github.com/jfinkels/osbclassifier',
    version='0.0.1-dev',
    #zip_safe=False
)

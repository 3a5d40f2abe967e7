from setuptools import find_packages, setup


version = '0.1.0'


setup(
    name='restbind',
    version=version,
    description='Binding CRUD resources to routes of WebOb applications',
    long_description=open('README').read() + '\n\n' + open('CHANGES').read(),
    license='BSD',
    packages=find_packages(exclude=['ez_setup', 'examples', 'tests']),
    python_requires='>=3.7',
    install_requires=[
        'WebOb >= 1.7',
    ],
    extras_require={
        'test': ['pytest'],
    },
    include_package_data=True,
    test_suite='restbind.tests',
    zip_safe=False,
    classifiers=[
        'Development Status :: 4 - Beta',
        'Environment :: Web Environment',
        'Intended Audience :: Developers',
        'License :: OSI Approved :: BSD License',
        'Operating System :: OS Independent',
        'Programming Language :: Python :: 3',
        'Topic :: Internet :: WWW/HTTP :: WSGI',
        'Topic :: Software Development :: Libraries',
    ],
    keywords='restbind routes routing rest crud webob')

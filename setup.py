import glob
import os

from setuptools import find_packages, setup

top_level_modules = [
    os.path.splitext(os.path.basename(p))[0] for p in glob.glob('src/*.py')
]

setup(
    name='assetdesk',
    version='1.0.0',
    packages=find_packages(where='src', exclude=['tests', 'tests.*']),
    package_dir={'': 'src'},
    py_modules=top_level_modules,
    include_package_data=True,
    description='Asset-management console data layer and backend-for-frontend',
    python_requires='>=3.11',
    install_requires=[
        'requests>=2.31',
        'pydantic>=2.5',
        'prometheus-client>=0.19',
        'fastapi>=0.110',
        'python-multipart>=0.0.9',
        'uvicorn>=0.27',
    ],
    extras_require={
        'test': [
            'pytest>=7.4',
            'httpx>=0.27',
        ],
    },
)

from setuptools import setup, find_packages

# Read long_description from file
try:
    long_description = open('README.rst', 'r').read()
except FileNotFoundError:
    long_description = ('Assigns spatial uncertainty categories to Darwin'
                        ' Core occurrence records using state and county'
                        ' boundary layers.')

setup(name='dwc_spatial_tools',
      version='0.1',
      description=("Tools for assessing the spatial uncertainty of"
                   " biodiversity occurrence records"),
      long_description=long_description,
      classifiers = [
        'License :: OSI Approved :: MIT License',
        'Programming Language :: Python :: 3',
      ],
      license='MIT',
      packages=find_packages(exclude=['tests', 'tests.*']),
      install_requires=[
        'geopandas',
        'numpy',
        'pandas',
        'pyproj',
        'pytest',
        'PyYAML',
        'Shapely',
      ],
      include_package_data=True,
      zip_safe=False)

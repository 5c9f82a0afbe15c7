"""
Packaging script for PyPI.
"""
import setuptools

setuptools.setup(
	name='loam-lang',
	version='0.1.0',
	packages=['loam', "loam.tree_walker", ],
	license='MIT',
	description='Scope resolution and a tree-walking evaluator for a small dynamically-typed scripting language',
	long_description=open('README.md').read(),
	long_description_content_type="text/markdown",
	classifiers=[
		"Programming Language :: Python :: 3.9",
		"License :: OSI Approved :: MIT License",
		"Operating System :: OS Independent",
		"Development Status :: 3 - Alpha",
		"Intended Audience :: Developers",
		"Intended Audience :: Education",
		"Topic :: Software Development :: Interpreters",
		"Topic :: Education",
    ],
	python_requires='>=3.9',
	install_requires=[
		"booze-tools>=0.6.2.1",
	]
)

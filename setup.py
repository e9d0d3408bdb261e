import setuptools

setuptools.setup(
    name="dicenotation",
    version="0.0.0",
    classifiers=["Programming Language :: Python :: 3"],
    packages=setuptools.find_packages(exclude=["tests"]),
    package_data={"dicenotation": ["notation.lark", "settings.default.yaml"]},
    entry_points={"console_scripts": ["dicenotation=dicenotation.__main__:main"]},
    install_requires=["lark", "pyyaml"],
    extras_require={"test": ["pytest"]},
)

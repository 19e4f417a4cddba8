# Make this directory a package.

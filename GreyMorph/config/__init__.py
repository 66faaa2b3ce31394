"""
This subpackage handles the text configuration files for GreyMorph.

The configuration files store the default parameters of the morphology
filters and of the parallel block processing.

This subpackage contains the default configuration files and the functions
to parse them.

"""

"""Define static metadata for nivox

The long description parameter is used in the nivox top-level docstring.
This file cannot import nivox or use relative imports.
"""

long_description = """
Voxel access to NIfTI1_ volumes.

nivox decodes the voxel data of NIfTI1 images into volumes that can be
queried voxel by voxel, with the data type conversion and the
``scl_slope`` / ``scl_inter`` scaling applied on access.  Volumes can be
sliced along any axis into lower dimensional views, without copying, and
converted to numpy arrays.

Header parsing is left to the caller; volumes are built from the header
fields, or from a header-like mapping such as a ``nibabel`` header.

.. _NIfTI1: http://nifti.nimh.nih.gov/nifti-1/

Testing
=======

Install the test dependencies and run pytest_::

    pip install nivox[test]
    pytest --pyargs nivox

.. _pytest: https://docs.pytest.org

License
=======

nivox is licensed under the terms of the MIT license. For more
information, please see the COPYING file.
"""

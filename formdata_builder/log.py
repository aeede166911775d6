import logging

builder_logger = logging.getLogger("formdata_builder.builder")
internal_logger = logging.getLogger("formdata_builder.internal")

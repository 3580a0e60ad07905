"""
server.py - HTTP front end for the Huffman codec.

POST raw bytes to /compress to get a container back, POST a container to
/decompress to get the original bytes. GET /health for liveness.
"""

import logging

from flask import Flask, Response, jsonify, request

from .compression import HuffmanCompressor
from .config_loader import load_config
from .errors import InternalConsistencyError, MalformedContainerError

logger = logging.getLogger(__name__)


def create_app(config=None):
    """Builds the Flask application from a configuration mapping."""
    if config is None:
        config = load_config()

    app = Flask(__name__)
    app.config["MAX_CONTENT_LENGTH"] = config["server"]["max_content_length"]
    compressor = HuffmanCompressor(
        print_tree=config["compression"]["print_tree"],
        print_text_char=config["compression"]["print_text_char"],
    )

    def read_body():
        data = request.get_data(cache=False)
        if not data:
            return None
        return data

    def octet_response(payload, original_size, compressed_size):
        response = Response(payload, mimetype="application/octet-stream")
        response.headers["X-Original-Size"] = str(original_size)
        response.headers["X-Compressed-Size"] = str(compressed_size)
        return response

    @app.route("/health", methods=["GET"])
    def health_check():
        return jsonify({"status": "ok"})

    @app.route("/compress", methods=["POST"])
    def compress():
        data = read_body()
        if data is None:
            return jsonify({"error": "Request body must contain the bytes to compress"}), 400
        container = compressor.compress(data)
        logger.info("Compressed %d bytes into %d bytes", len(data), len(container))
        return octet_response(container, len(data), len(container))

    @app.route("/decompress", methods=["POST"])
    def decompress():
        data = read_body()
        if data is None:
            return jsonify({"error": "Request body must contain a compressed container"}), 400
        try:
            original = compressor.decompress(data)
        except MalformedContainerError as e:
            logger.warning("Rejected malformed container: %s", e)
            return jsonify({"error": str(e)}), 400
        logger.info("Decompressed %d bytes into %d bytes", len(data), len(original))
        return octet_response(original, len(original), len(data))

    @app.errorhandler(413)
    def too_large(_error):
        return jsonify({"error": "Request body exceeds the configured size limit"}), 413

    @app.errorhandler(InternalConsistencyError)
    def internal_error(error):
        logger.error("Internal codec error: %s", error)
        return jsonify({"error": "Internal server error"}), 500

    return app


if __name__ == "__main__":
    config = load_config()
    logging.basicConfig(level=config["logging"]["level"])
    create_app(config).run(host=config["server"]["host"], port=config["server"]["port"])

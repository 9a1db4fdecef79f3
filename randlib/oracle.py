# randlib/oracle.py
# Flask draw service exposing /get_output, /rand/<kind>, /validate and /health
# Seeded from config.SEED_SOURCE = 'manual' | 'time' | 'crand' | 'urandom' | 'random'

import logging
import threading

from flask import Flask, jsonify, request

from randlib import config
from randlib.generator import DRAWS, Random

logger = logging.getLogger('randlib.oracle')

MAX_COUNT = 1024


def hex_digits(bits):
    return (bits + 3) // 4


def create_app(rng=None, output_bits=None):
    output_bits = output_bits or config.OUTPUT_BITS
    if not 1 <= output_bits <= 128:
        raise ValueError(f"OUTPUT_BITS must be in 1..128, got {output_bits}")
    if rng is None:
        seed = config.SEED if str(config.SEED_SOURCE).lower() == 'manual' else None
        rng = Random(config.SEED_SOURCE, seed)

    app = Flask('randlib.oracle')
    # Flask serves on threads; a Random must not be stepped concurrently
    lock = threading.Lock()

    def next_output():
        with lock:
            return rng.rand_bits(output_bits)

    @app.route('/health', methods=['GET'])
    def health():
        return jsonify({'ok': True, 'source': str(config.SEED_SOURCE), 'output_bits': output_bits})

    @app.route('/get_output', methods=['GET'])
    def get_output():
        out = next_output()
        return jsonify({'output': format(out, '0{}x'.format(hex_digits(output_bits)))})

    @app.route('/rand/<kind>', methods=['GET'])
    def rand(kind):
        draw = DRAWS.get(kind)
        if draw is None:
            return jsonify({'ok': False, 'reason': f"unknown kind '{kind}'", 'kinds': sorted(DRAWS)}), 404
        count = request.args.get('count')
        if count is None:
            with lock:
                value = draw(rng)
            return jsonify({'kind': kind, 'value': value})
        try:
            n = int(count)
        except ValueError:
            return jsonify({'ok': False, 'reason': 'bad count'}), 400
        if not 1 <= n <= MAX_COUNT:
            return jsonify({'ok': False, 'reason': f'count must be in 1..{MAX_COUNT}'}), 400
        with lock:
            values = [draw(rng) for _ in range(n)]
        return jsonify({'kind': kind, 'values': values})

    @app.route('/validate', methods=['POST'])
    def validate():
        data = request.get_json(silent=True)
        if not data or 'candidate' not in data:
            return jsonify({'ok': False, 'reason': 'need candidate'}), 400
        try:
            candidate = int(data['candidate'], 16)
        except (TypeError, ValueError):
            return jsonify({'ok': False, 'reason': 'bad hex'}), 400
        expected = next_output()
        ok = (candidate & ((1 << output_bits) - 1)) == expected
        if ok:
            logger.warning("Validated a predicted output: generator state is known to the client")
        return jsonify({'ok': ok, 'expected': format(expected, '0{}x'.format(hex_digits(output_bits)))})

    return app


def main():
    logging.basicConfig(level=getattr(logging, config.LOG_LEVEL.upper(), logging.INFO))
    app = create_app()
    logger.info(f"Starting draw service at http://{config.HOST}:{config.PORT} with SEED_SOURCE={config.SEED_SOURCE}")
    app.run(host=config.HOST, port=config.PORT, debug=False)


if __name__ == '__main__':
    main()

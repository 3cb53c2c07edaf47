""" A minimal handler that answers every HTTP request with a greeting. Run
    it alongside a Mongrel2 front end configured with a handler such as::

        Handler(send_spec='tcp://127.0.0.1:9997',
                send_ident='54c6755b-9628-40a4-9a2d-cc82a816345e',
                recv_spec='tcp://127.0.0.1:9996', recv_ident='')

    with MONGREL2_PULL=tcp://127.0.0.1:9997 and MONGREL2_PUB=tcp://127.0.0.1:9996
    in the environment.
"""

import logging
import mongrel2


def main():

    logging.basicConfig(level=logging.DEBUG)

    config = mongrel2.Configuration.from_environ()
    connection = mongrel2.Connection.from_config(config)

    with connection:
        while True:
            try:
                request = connection.recv()
            except mongrel2.FormatError as exc:
                # One bad message does not warrant giving up on the rest.
                logging.warning('dropping malformed request: %s', exc)
                continue

            if request.is_disconnect():
                continue

            body = 'Hello from %s\n' % (request.path)
            headers = {'Content-Type': ['text/plain']}
            connection.reply_http(request, body, 200, 'OK', headers)

            if request.should_close():
                connection.reply(request, b'')


if __name__ == '__main__':
    main()


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:

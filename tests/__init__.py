def capture(captureType):
    """
    Returns functions for data capture and retrieval.
    
    Arguments
    ---------
    - captureType: str
        The type of capture-return function pair to return

    Return
    ------
    capture(), return()
    """
    storage = {'data': None}
    
    def captureOutput(
        *objects,
        sep=' ',
        end='\n',
        **_,
    ):
        """
        Captures output into a storage object.
        Can be used interchangeably with Python's built-in print().
        """
        outputstr = sep.join([str(obj) for obj in objects]) + end
        storage['data'] += outputstr

    def captureError(err):
        """
        Captures error reports into a storage object.
        Can be used interchangeably with lox.report().
        """
        storage['data'] += err.report() + '\n'

    def returnData():
        """Returns the captured data"""
        return storage['data']

    if captureType == 'output':
        storage['data'] = ''
        return captureOutput, returnData
    if captureType == 'error':
        storage['data'] = ''
        return captureError, returnData
    raise ValueError(f"Invalid capture type {captureType!r}")


def run(code, session=None):
    """
    Runs code in a new (or the given) Lox instance, capturing output
    and errors.

    Return
    ------
    The run's Result dict, with captured 'output' and 'report' strings
    added.
    """
    import lox

    if session is None:
        session = lox.Lox()
    captureOutput, returnOutput = capture('output')
    captureError, returnErrors = capture('error')
    session.registerHandlers(
        output=captureOutput,
        error=captureError,
    )
    result = session.run(code)
    result['output'] = returnOutput()
    result['report'] = returnErrors()
    return result
